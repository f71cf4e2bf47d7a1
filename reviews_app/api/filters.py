import django_filters

from ..models import Review


class ReviewFilter(django_filters.FilterSet):
    """
    A FilterSet for the review list.

    Attributes:
        establishmentId (UUIDFilter): Reviews of one establishment.
        userId (UUIDFilter): Reviews written by one user.
        minRating (NumberFilter): Ratings greater than or equal to the value (1 to 5).
        maxRating (NumberFilter): Ratings less than or equal to the value (1 to 5).
    """
    establishmentId = django_filters.UUIDFilter(field_name='establishment_id')
    userId = django_filters.UUIDFilter(field_name='user_id')
    minRating = django_filters.NumberFilter(
        field_name='rating', lookup_expr='gte', min_value=1, max_value=5
    )
    maxRating = django_filters.NumberFilter(
        field_name='rating', lookup_expr='lte', min_value=1, max_value=5
    )

    class Meta:
        model = Review
        fields = ['establishmentId', 'userId', 'minRating', 'maxRating']
