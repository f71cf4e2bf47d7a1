import django_filters
from django.db.models import Q

from user_auth_app.models import User


class UserFilter(django_filters.FilterSet):
    """
    A FilterSet for the administrators' user list.

    Attributes:
        search (CharFilter): Case-insensitive substring match on name or e-mail.
        role (ChoiceFilter): Exact role.
        status (ChoiceFilter): Exact account status.
    """
    search = django_filters.CharFilter(method='filter_search')
    role = django_filters.ChoiceFilter(choices=User.Role.choices)
    status = django_filters.ChoiceFilter(choices=User.Status.choices)

    class Meta:
        model = User
        fields = ['search', 'role', 'status']

    def filter_search(self, queryset, name, value):
        return queryset.filter(Q(name__icontains=value) | Q(email__icontains=value))
