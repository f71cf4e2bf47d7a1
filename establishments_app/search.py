"""
Paginated, filtered and geo-aware establishment search.

The flow is: build the AND predicate with `EstablishmentFilter`, order and slice one page, drop
page items below `minRating`, then attach scores and distances. The `minRating` filter runs after
pagination, so a page can come back shorter than `limit` while `total` still counts every match.
"""
from django_filters.utils import translate_validation

from core.pagination import paginate
from places_app.geo import haversine_km

from .api.filters import EstablishmentFilter
from .scoring import mean_rating
from .services import establishment_queryset, with_score

FILTER_KEYS = ('search', 'category', 'city', 'state')


def search_establishments(criteria):
    """
    Runs a search.

    Args:
        criteria (dict): Validated search parameters: `page`, `limit` and any of `search`,
            `category`, `city`, `state`, `min_rating`, `latitude`, `longitude`, `radius`.

    Returns:
        dict: `{'items': [Establishment, ...], 'pagination': {...}}`. Items carry
        `accessibility_score`, `review_count` and, when both coordinates were given,
        `distance_km`.

    Raises:
        rest_framework.exceptions.ValidationError: If a filter value is rejected by the filter
            set.
    """
    filter_data = {
        key: criteria[key] for key in FILTER_KEYS if criteria.get(key) not in (None, '')
    }
    filterset = EstablishmentFilter(data=filter_data, queryset=establishment_queryset())
    if not filterset.is_valid():
        raise translate_validation(filterset.errors)

    latitude = criteria.get('latitude')
    longitude = criteria.get('longitude')
    has_origin = latitude is not None and longitude is not None

    # Latitude order only approximates proximity; the radius is not applied as a filter.
    if has_origin:
        queryset = filterset.qs.order_by('latitude', '-created_at')
    else:
        queryset = filterset.qs.order_by('-created_at')

    items, pagination = paginate(queryset, criteria['page'], criteria['limit'])

    min_rating = criteria.get('min_rating')
    if min_rating is not None:
        items = [item for item in items if _meets_min_rating(item, min_rating)]

    for item in items:
        with_score(item)
        if has_origin:
            item.distance_km = haversine_km(latitude, longitude, item.latitude, item.longitude)

    return {'items': items, 'pagination': pagination}


def _meets_min_rating(establishment, min_rating):
    average = mean_rating(review.rating for review in establishment.reviews.all())
    return average is not None and average >= min_rating
