from rest_framework import exceptions
from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token authentication using the `Authorization: Bearer <token>` header.

    On top of DRF's checks (unknown token, `is_active`), the account status must be ACTIVE:
    pending and banned accounts are rejected with 401 just like an invalid token.
    """
    keyword = 'Bearer'

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        if not user.is_active_account:
            raise exceptions.AuthenticationFailed('User account is not active.')
        return user, token
