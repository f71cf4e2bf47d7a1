from rest_framework import permissions

from .exceptions import ForbiddenError


def is_admin(principal):
    return getattr(principal, 'role', None) == 'ADMIN'


def can_mutate(principal, owner_id):
    """
    The single authorization rule for changing owned resources.

    A principal may update or delete an establishment or a review when it owns the resource or
    holds the ADMIN role.

    Args:
        principal: The authenticated user (`request.user`).
        owner_id: The primary key of the resource's owner (establishment owner or review author).

    Returns:
        bool: True if the principal may mutate the resource.
    """
    if principal is None or not getattr(principal, 'is_authenticated', False):
        return False
    return principal.pk == owner_id or is_admin(principal)


def ensure_can_mutate(principal, owner_id, message=None):
    """Raises `ForbiddenError` when `can_mutate` denies the principal."""
    if not can_mutate(principal, owner_id):
        raise ForbiddenError(message)


class IsOwnerOrAdminRole(permissions.BasePermission):
    """
    Allows access only to users whose role is OWNER or ADMIN.

    Used for endpoints that only establishment owners may reach, such as registering an
    establishment or listing the caller's own establishments.
    """
    message = "Access denied. Only establishment owners can access this resource."

    def has_permission(self, request, view):
        # Anonymous users are rejected first so DRF answers 401 instead of 403.
        if not request.user or not request.user.is_authenticated:
            return False
        return request.user.role in ('OWNER', 'ADMIN')


class IsAdminRole(permissions.BasePermission):
    """Allows access only to users whose role is ADMIN. Used by the user management endpoints."""
    message = "Access denied. Only administrators can access this resource."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return is_admin(request.user)
