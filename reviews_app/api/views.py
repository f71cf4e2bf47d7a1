from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from establishments_app.api.views import UUID_PATTERN

from .. import services
from .pagination import ReviewPagination
from .serializers import ReviewCreateSerializer, ReviewReadSerializer, ReviewUpdateSerializer


class ReviewViewSet(viewsets.GenericViewSet):
    """
    Manages reviews.

    This ViewSet provides the following endpoints:
    - `GET /api/reviews/`: Lists reviews, filterable by establishment, author and rating range.
    - `POST /api/reviews/`: Submits a review (one per user and establishment).
    - `GET /api/reviews/{id}/`: Retrieves a single review.
    - `PUT/PATCH /api/reviews/{id}/`: Updates a review (author or ADMIN).
    - `DELETE /api/reviews/{id}/`: Deletes a review (author or ADMIN).
    - `GET /api/reviews/establishment/{establishment_id}/stats/`: Rating statistics.
    - `GET /api/reviews/my/reviews/`: Reviews written by the caller.
    """
    serializer_class = ReviewReadSerializer
    pagination_class = ReviewPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """
        Dynamically assigns permissions based on the current action.

        - 'list', 'retrieve', 'establishment_stats': public.
        - everything else: the caller must be authenticated. Ownership of an existing review is
          checked by the review service.
        """
        if self.action in ['list', 'retrieve', 'establishment_stats']:
            permission_classes = [AllowAny]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def list(self, request):
        queryset = services.list_reviews(request.query_params)
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(ReviewReadSerializer(page, many=True).data)

    def create(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = services.create_review(request.user, serializer.validated_data)
        return Response(ReviewReadSerializer(review).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        return Response(ReviewReadSerializer(services.get_review(pk)).data)

    def update(self, request, pk=None):
        serializer = ReviewUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        review = services.update_review(request.user, pk, serializer.validated_data)
        return Response(ReviewReadSerializer(review).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        services.delete_review(request.user, pk)
        return Response({'message': 'Review deleted successfully.'}, status=status.HTTP_200_OK)

    @action(
        detail=False,
        methods=['get'],
        url_path=r'establishment/(?P<establishment_id>%s)/stats' % UUID_PATTERN,
    )
    def establishment_stats(self, request, establishment_id=None):
        return Response(services.stats_for(establishment_id))

    @action(detail=False, methods=['get'], url_path='my/reviews')
    def my_reviews(self, request):
        page = self.paginate_queryset(services.list_by_user(request.user.pk))
        return self.get_paginated_response(ReviewReadSerializer(page, many=True).data)
