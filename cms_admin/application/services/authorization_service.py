"""Authorization service: claims-based and database-backed permission checks."""

from __future__ import annotations

from cms_admin.application.interfaces.repositories import (
    IRolePermissionRepository,
    IUserRoleRepository,
)
from cms_admin.core.constants import FULL_ADMIN_ACCESS_PERMISSION
from cms_admin.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
)
from cms_admin.shared.context import CurrentUserContext
from cms_admin.shared.logging import get_logger

logger = get_logger(__name__)


class AuthorizationService:
    """Stateless permission checks. Nothing is cached; every DB check hits the store.

    has_permission trusts the caller's claims (materialised at sign-in).
    has_permission_async resolves the user's roles in the database and is the
    authoritative path for background jobs and impersonation.
    Holding the full-admin permission satisfies every check on both paths.
    """

    def __init__(
        self,
        user_role_repo: IUserRoleRepository,
        role_permission_repo: IRolePermissionRepository,
        full_admin_permission: str = FULL_ADMIN_ACCESS_PERMISSION,
    ) -> None:
        self._user_role_repo = user_role_repo
        self._role_permission_repo = role_permission_repo
        self._full_admin_permission = full_admin_permission

    def has_permission(self, context: CurrentUserContext, permission_name: str) -> bool:
        """Claims check for the given caller; False when unauthenticated."""
        return context.has_permission(permission_name, self._full_admin_permission)

    async def has_permission_async(
        self, user_id: str, permission_name: str, module: str | None = None
    ) -> bool:
        """Database check: True iff one of the user's roles grants the permission or full admin.

        With module, only grants stored for that module are considered.
        """
        role_ids = await self._user_role_repo.get_role_ids_by_user_id(user_id)
        if not role_ids:
            return False
        return await self._role_permission_repo.does_any_role_have_permission(
            role_ids, permission_name, self._full_admin_permission, module
        )

    def require_permission(self, context: CurrentUserContext, permission_name: str) -> None:
        """Raise AuthenticationException for anonymous callers, AuthorizationException if the claim is missing."""
        if not context.is_authenticated:
            raise AuthenticationException()
        if not self.has_permission(context, permission_name):
            logger.warning(
                "Permission %s denied for user %s", permission_name, context.user_id
            )
            raise AuthorizationException(permission=permission_name)

