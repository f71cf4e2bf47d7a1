import logging

from django_filters.utils import translate_validation
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import NotFoundError
from core.permissions import IsAdminRole
from user_auth_app.models import User

from .filters import UserFilter
from .pagination import UserPagination
from .serializers import (
    AdminUserUpdateSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegistrationSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


class UserCollectionView(APIView):
    """
    Handles new user registration and the administrators' user list.

    Endpoints:
        POST /api/users/
            Public. Registers an account.
            - 201 Created: `{"token": "...", "user": {...}}`, so the client is logged in at once.
            - 400 Bad Request: The payload is invalid.
            - 409 Conflict: The e-mail address is already in use.
        GET /api/users/?page&limit&search&role&status
            ADMIN only. Lists users newest first as `{"users": [...], "pagination": {...}}`.
            `search` matches name or e-mail, case-insensitively.
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [AllowAny()]
        return [IsAdminRole()]

    def get(self, request):
        filterset = UserFilter(data=request.query_params,
                               queryset=User.objects.order_by('-date_joined'))
        if not filterset.is_valid():
            raise translate_validation(filterset.errors)

        paginator = UserPagination()
        page = paginator.paginate_queryset(filterset.qs, request, view=self)
        return paginator.get_paginated_response(UserSerializer(page, many=True).data)

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        token, created = Token.objects.get_or_create(user=user)
        data = {
            'token': token.key,
            'user': UserSerializer(user).data,
        }
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    Exchanges e-mail and password for a bearer token.

    Endpoint:
        POST /api/users/login/

    Responses:
        - 200 OK: `{"token": "...", "user": {...}}`. Send the token as
          `Authorization: Bearer <token>`.
        - 400 Bad Request: Missing or malformed fields.
        - 401 Unauthorized: Wrong credentials or an account that is not ACTIVE.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']

        token, created = Token.objects.get_or_create(user=user)
        data = {
            'token': token.key,
            'user': UserSerializer(user).data,
        }
        return Response(data, status=status.HTTP_200_OK)


class ProfileView(APIView):
    """
    Reads or changes the authenticated caller's own account.

    Endpoints:
        GET /api/users/profile/
        PUT/PATCH /api/users/profile/
            Updates `name` and `avatarUrl`. Omitted fields keep their value.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def put(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)

    def patch(self, request):
        return self.put(request)


class ChangePasswordView(APIView):
    """
    Changes the caller's password after checking the current one.

    Endpoint:
        PATCH /api/users/change-password/

    Responses:
        - 200 OK: `{"message": "..."}`. Existing tokens stay valid.
        - 400 Bad Request: The current password is wrong or the new one is too short.
    """
    permission_classes = [IsAuthenticated]

    def patch(self, request):
        serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({'message': 'Password changed successfully.'})


class UserDetailView(APIView):
    """
    Administrator access to a single account.

    Endpoints:
        GET /api/users/{id}/
        PUT/PATCH /api/users/{id}/
            Updates `name`, `avatarUrl`, `role` and `status`. Omitted fields keep their value.
        DELETE /api/users/{id}/
            Removes the account together with its establishments and reviews, and the reviews
            other users wrote about those establishments. Responds `200 {"message": "..."}`.

    All methods require the ADMIN role and answer 404 for an unknown id.
    """
    permission_classes = [IsAdminRole]

    def get_object(self, pk):
        user = User.objects.filter(pk=pk).first()
        if user is None:
            raise NotFoundError('User not found.')
        return user

    def get(self, request, pk):
        return Response(UserSerializer(self.get_object(pk)).data)

    def put(self, request, pk):
        serializer = AdminUserUpdateSerializer(self.get_object(pk), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Admin %s updated user %s", request.user.pk, user.pk)
        return Response(UserSerializer(user).data)

    def patch(self, request, pk):
        return self.put(request, pk)

    def delete(self, request, pk):
        user = self.get_object(pk)
        user.delete()
        logger.info("Admin %s deleted user %s", request.user.pk, pk)
        return Response({'message': 'User deleted successfully.'})
