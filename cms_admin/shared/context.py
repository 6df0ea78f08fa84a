"""Caller context passed explicitly into service calls.

The context is an immutable snapshot built once per request (from the bearer
token) and handed to whichever service needs it. There is no request-scoped
global: a service sees exactly the caller it was given.

Usage:
    ctx = CurrentUserContext.authenticated("user123", {"manage_roles"})
    ctx.has_permission("manage_roles")  # True
    CurrentUserContext.anonymous().is_authenticated  # False
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from cms_admin.core.constants import FULL_ADMIN_ACCESS_PERMISSION


@dataclass(frozen=True)
class CurrentUserContext:
    """Immutable snapshot of the caller: id, authentication flag and permission claims."""

    user_id: str | None
    is_authenticated: bool = False
    permissions: frozenset[str] = field(default_factory=frozenset)
    ip_address: str | None = None

    @classmethod
    def anonymous(cls, ip_address: str | None = None) -> "CurrentUserContext":
        """Return the unauthenticated caller context."""
        return cls(user_id=None, ip_address=ip_address)

    @classmethod
    def authenticated(
        cls,
        user_id: str,
        permissions: Iterable[str] = (),
        ip_address: str | None = None,
    ) -> "CurrentUserContext":
        """Return an authenticated context with the given permission claims.

        Raises:
            ValueError: If user_id is empty.
        """
        if not user_id:
            raise ValueError("user_id is required for an authenticated context")
        return cls(
            user_id=user_id,
            is_authenticated=True,
            permissions=frozenset(permissions),
            ip_address=ip_address,
        )

    def has_permission(
        self,
        permission_name: str,
        full_admin_permission: str = FULL_ADMIN_ACCESS_PERMISSION,
    ) -> bool:
        """Return True if the claims include permission_name or the full-admin permission.

        Always False for unauthenticated callers.
        """
        if not self.is_authenticated:
            return False
        return (
            permission_name in self.permissions
            or full_admin_permission in self.permissions
        )

    def require_user_id(self) -> str:
        """Return user_id for audit stamping; raise ValueError when anonymous."""
        if not self.is_authenticated or not self.user_id:
            raise ValueError("An authenticated user is required for this operation")
        return self.user_id
