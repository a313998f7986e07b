"""
Custom permission classes for role based access control.
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS

ADMIN_ROLE = "admin"


def _is_admin(user) -> bool:
    return bool(user and user.is_authenticated and user.has_role(ADMIN_ROLE))


class IsAdminRole(BasePermission):
    """Allow access only to accounts holding the ``admin`` role."""
    message = 'Administrator role required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _is_admin(getattr(request, "user", None))


class IsAdminOrReadOnly(BasePermission):
    """Any authenticated account may read; writes need the ``admin`` role."""
    message = 'Administrator role required'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        user = getattr(request, "user", None)
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return True
        return _is_admin(user)
