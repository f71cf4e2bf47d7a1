import django_filters
from django.db.models import Q

from ..models import Establishment


class EstablishmentFilter(django_filters.FilterSet):
    """
    Builds the predicate for the establishment search.

    Every filter is optional and all supplied filters are combined with AND.

    Attributes:
        search (CharFilter): Case-insensitive substring over name, description and neighborhood.
        category (ChoiceFilter): Exact category value.
        city (CharFilter): Case-insensitive substring of the city.
        state (CharFilter): Exact two-letter state code; the input is upper-cased first.
    """
    search = django_filters.CharFilter(method='filter_search')
    category = django_filters.ChoiceFilter(choices=Establishment.Category.choices)
    city = django_filters.CharFilter(field_name='city', lookup_expr='icontains')
    state = django_filters.CharFilter(method='filter_state', max_length=2)

    class Meta:
        model = Establishment
        fields = ['search', 'category', 'city', 'state']

    def filter_search(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value)
            | Q(description__icontains=value)
            | Q(neighborhood__icontains=value)
        )

    def filter_state(self, queryset, name, value):
        return queryset.filter(state=value.upper())
