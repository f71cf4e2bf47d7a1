from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core.exceptions import ValidationError
from core.permissions import IsOwnerOrAdminRole

from .. import services
from ..search import search_establishments
from .pagination import EstablishmentPagination
from .serializers import (
    EstablishmentSearchSerializer,
    EstablishmentSerializer,
    EstablishmentWriteSerializer,
)

LIST_REVIEW_LIMIT = 5
UUID_PATTERN = '[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'


class EstablishmentViewSet(viewsets.GenericViewSet):
    """
    Manages establishments.

    This ViewSet provides the following endpoints:
    - `GET /api/establishments/`: Searches establishments with filters and pagination.
    - `POST /api/establishments/`: Registers an establishment (OWNER or ADMIN).
    - `GET /api/establishments/{id}/`: Retrieves one establishment with all of its reviews.
    - `PUT/PATCH /api/establishments/{id}/`: Updates an establishment (owner or ADMIN).
    - `DELETE /api/establishments/{id}/`: Deletes an establishment and its reviews.
    - `GET /api/establishments/my/establishments/`: The caller's own establishments.

    The views only validate input and shape output. Storage, authorization and scoring live in
    `establishments_app.services` and `establishments_app.search`.
    """
    serializer_class = EstablishmentSerializer
    pagination_class = EstablishmentPagination
    lookup_value_regex = UUID_PATTERN

    def get_permissions(self):
        """
        Assigns permissions per action:
        - 'create', 'my_establishments': the caller must have role OWNER or ADMIN.
        - 'update', 'partial_update', 'destroy': the caller must be authenticated; ownership is
          checked by the service once the establishment is loaded.
        - 'list', 'retrieve': public.
        """
        if self.action in ['create', 'my_establishments']:
            permission_classes = [IsOwnerOrAdminRole]
        elif self.action in ['update', 'partial_update', 'destroy']:
            permission_classes = [IsAuthenticated]
        else:
            permission_classes = [AllowAny]
        return [permission() for permission in permission_classes]

    def list(self, request):
        params = EstablishmentSearchSerializer(data=request.query_params)
        if not params.is_valid():
            raise ValidationError('Invalid search parameters.', details=params.errors)

        result = search_establishments(params.validated_data)
        serializer = EstablishmentSerializer(
            result['items'],
            many=True,
            context={'request': request, 'review_limit': LIST_REVIEW_LIMIT},
        )
        return Response({
            'establishments': serializer.data,
            'pagination': result['pagination'],
        })

    def create(self, request):
        serializer = EstablishmentWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        establishment = services.create_establishment(request.user, serializer.validated_data)
        return Response(
            EstablishmentSerializer(establishment, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )

    def retrieve(self, request, pk=None):
        establishment = services.get_establishment(pk)
        return Response(EstablishmentSerializer(establishment, context={'request': request}).data)

    def update(self, request, pk=None):
        # PUT is accepted as a partial update; omitted fields keep their values.
        serializer = EstablishmentWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        establishment = services.update_establishment(request.user, pk, serializer.validated_data)
        return Response(EstablishmentSerializer(establishment, context={'request': request}).data)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        services.delete_establishment(request.user, pk)
        return Response(
            {'message': 'Establishment deleted successfully.'},
            status=status.HTTP_200_OK,
        )

    @action(detail=False, methods=['get'], url_path='my/establishments')
    def my_establishments(self, request):
        queryset = services.list_owned_by(request.user.pk)
        page = self.paginate_queryset(queryset)
        items = [services.with_score(establishment) for establishment in page]
        serializer = EstablishmentSerializer(
            items,
            many=True,
            context={'request': request, 'review_limit': LIST_REVIEW_LIMIT},
        )
        return self.get_paginated_response(serializer.data)
