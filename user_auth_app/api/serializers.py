import logging

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework import serializers

from core.exceptions import ConflictError, UnauthorizedError
from user_auth_app.models import User

logger = logging.getLogger(__name__)


class UserSerializer(serializers.ModelSerializer):
    """
    Serializes a `User` for read operations.

    Used for the profile endpoint and embedded in the registration and login responses. The
    password and Django's staff flags are never exposed.
    """
    avatarUrl = serializers.URLField(source='avatar_url', read_only=True)
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role', 'status', 'avatarUrl', 'createdAt', 'updatedAt']
        read_only_fields = fields


class RegistrationSerializer(serializers.Serializer):
    """
    Handles the registration of a new user.

    Input Fields:
        - name (str): Display name, 3 to 100 characters.
        - email (str): Login e-mail. Must not be in use yet.
        - password (str): At least 6 characters.
        - role (str): USER (default) or OWNER. ADMIN accounts are granted by an administrator,
          never through self-registration.

    Output:
        - On save, returns the newly created `User` instance.
    """
    name = serializers.CharField(min_length=3, max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=6,
        max_length=100,
        write_only=True,
        style={'input_type': 'password'},
        trim_whitespace=False,
    )
    role = serializers.ChoiceField(
        choices=[User.Role.USER, User.Role.OWNER],
        default=User.Role.USER,
    )

    def validate_email(self, value):
        return value.strip().lower()

    def create(self, validated_data):
        """
        Creates the user, translating a duplicate e-mail into `ConflictError`.

        The lookup gives the friendly error; the unique index on `email` catches registrations
        that race past it.
        """
        email = validated_data['email']
        if User.objects.filter(email__iexact=email).exists():
            raise ConflictError('Email is already in use.')

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=validated_data['password'],
                    name=validated_data['name'],
                    role=validated_data['role'],
                )
        except IntegrityError:
            logger.warning("Concurrent registration for %s rejected by the unique index", email)
            raise ConflictError('Email is already in use.')

        logger.info("User %s registered with role %s", user.pk, user.role)
        return user


class LoginSerializer(serializers.Serializer):
    """
    Authenticates a user by e-mail and password.

    On success the authenticated user is attached to the validated data as `user`. Wrong
    credentials and accounts that are not ACTIVE both fail with `UnauthorizedError`.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        label="Password",
        style={'input_type': 'password'},
        trim_whitespace=False,
    )

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get('request'),
            username=attrs['email'].strip().lower(),
            password=attrs['password'],
        )

        if not user:
            raise UnauthorizedError('Invalid email or password.')

        if not user.is_active_account:
            raise UnauthorizedError('User account is not active.')

        attrs['user'] = user
        return attrs


class ProfileUpdateSerializer(serializers.ModelSerializer):
    """
    The fields a user may change on their own account.

    Every field is optional. `avatarUrl` may be set to null to remove the picture. The e-mail,
    role and status are not editable here.
    """
    name = serializers.CharField(min_length=3, max_length=100, required=False)
    avatarUrl = serializers.URLField(source='avatar_url', allow_null=True, required=False)

    class Meta:
        model = User
        fields = ['name', 'avatarUrl']


class AdminUserUpdateSerializer(ProfileUpdateSerializer):
    """Profile fields plus the role and status, which only administrators may change."""
    role = serializers.ChoiceField(choices=User.Role.choices, required=False)
    status = serializers.ChoiceField(choices=User.Status.choices, required=False)

    class Meta(ProfileUpdateSerializer.Meta):
        fields = ProfileUpdateSerializer.Meta.fields + ['role', 'status']


class ChangePasswordSerializer(serializers.Serializer):
    """
    Changes the authenticated user's password.

    Input Fields:
        - currentPassword (str): Must match the stored password.
        - newPassword (str): 6 to 100 characters.

    The user is taken from the `request` in the serializer context.
    """
    currentPassword = serializers.CharField(
        write_only=True,
        style={'input_type': 'password'},
        trim_whitespace=False,
    )
    newPassword = serializers.CharField(
        min_length=6,
        max_length=100,
        write_only=True,
        style={'input_type': 'password'},
        trim_whitespace=False,
    )

    def validate_currentPassword(self, value):
        if not self.context['request'].user.check_password(value):
            raise serializers.ValidationError('Current password is incorrect.')
        return value

    def save(self):
        user = self.context['request'].user
        user.set_password(self.validated_data['newPassword'])
        user.save(update_fields=['password', 'updated_at'])
        logger.info("User %s changed their password", user.pk)
        return user


class OwnerSummarySerializer(serializers.ModelSerializer):
    """The owner block embedded in establishment responses."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class AuthorSummarySerializer(serializers.ModelSerializer):
    """The author block embedded in review responses. The e-mail is not exposed."""
    avatarUrl = serializers.URLField(source='avatar_url', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'avatarUrl']
        read_only_fields = fields
