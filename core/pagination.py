import math

from rest_framework import serializers
from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from .exceptions import ValidationError

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PageParamsSerializer(serializers.Serializer):
    """Validates the `page` and `limit` query parameters shared by every list endpoint."""
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=MAX_LIMIT, default=DEFAULT_LIMIT)


def parse_page_params(query_params):
    """
    Reads `page` and `limit` from a query dict.

    Raises:
        ValidationError: If either value is not an integer or is out of range.
    """
    serializer = PageParamsSerializer(data=query_params)
    if not serializer.is_valid():
        raise ValidationError('Invalid pagination parameters.', details=serializer.errors)
    return serializer.validated_data['page'], serializer.validated_data['limit']


def paginate(queryset, page, limit):
    """
    Fetches one page of a queryset with skip/take semantics.

    The total is counted on the unsliced queryset. A page beyond the last one yields an empty
    list instead of an error.

    Returns:
        tuple: `(items, pagination)` where `pagination` is
        `{'page', 'limit', 'total', 'totalPages'}` and `totalPages == ceil(total / limit)`.
    """
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    pagination = {
        'page': page,
        'limit': limit,
        'total': total,
        'totalPages': math.ceil(total / limit),
    }
    return items, pagination


class PagePagination(BasePagination):
    """
    Page/limit pagination producing `{<results_key>: [...], 'pagination': {...}}`.

    Subclasses set `results_key` to name the list in the response body, for example
    `establishments` or `reviews`.
    """
    results_key = 'results'

    def paginate_queryset(self, queryset, request, view=None):
        page, limit = parse_page_params(request.query_params)
        items, self.pagination = paginate(queryset, page, limit)
        return items

    def get_paginated_response(self, data):
        return Response({self.results_key: data, 'pagination': self.pagination})
