"""User-role mapping service: idempotent assign/unassign and listing."""

from __future__ import annotations

from cms_admin.application.dtos.user_role import UserRoleResult
from cms_admin.application.interfaces.repositories import (
    IRoleRepository,
    IUserRoleRepository,
)
from cms_admin.core.modules import ModuleRegistry
from cms_admin.domain.exceptions import ResourceNotFoundException, ValidationException
from cms_admin.shared.logging import get_logger

logger = get_logger(__name__)


class UserRoleService:
    """Assign roles to users, optionally per module. A (user, role, module) triple exists at most once."""

    def __init__(
        self,
        user_role_repo: IUserRoleRepository,
        role_repo: IRoleRepository,
        *,
        modules: ModuleRegistry | None = None,
    ) -> None:
        self._user_role_repo = user_role_repo
        self._role_repo = role_repo
        self._modules = modules or ModuleRegistry()

    async def assign_role(
        self,
        user_id: str,
        role_id: str,
        module: str | None = None,
        *,
        is_system_assigned: bool = False,
    ) -> bool:
        """Assign role to user. Return False when the assignment already existed.

        Raises:
            ResourceNotFoundException: If the role does not exist or is soft-deleted.
            ValidationException: If user_id is empty or module is not registered.
        """
        if not user_id or not user_id.strip():
            raise ValidationException("user_id is required", field="user_id")
        module = self._modules.validate(module)
        role = await self._role_repo.get_by_id(role_id)
        if role is None or role.is_deleted:
            raise ResourceNotFoundException("Role", role_id)
        if await self._user_role_repo.exists(user_id, role_id, module):
            return False
        await self._user_role_repo.assign_role_to_user(
            user_id, role_id, module=module, is_system_assigned=is_system_assigned
        )
        logger.info("Role %s assigned to user %s (module=%s)", role.name, user_id, module)
        return True

    async def unassign_role(
        self, user_id: str, role_id: str, module: str | None = None
    ) -> bool:
        """Remove an assignment. Return False when there was nothing to remove."""
        removed = await self._user_role_repo.remove_role_from_user(
            user_id, role_id, self._modules.validate(module)
        )
        if removed:
            logger.info("Role %s unassigned from user %s (module=%s)", role_id, user_id, module)
        return removed

    async def get_roles_for_user(
        self, user_id: str, module: str | None = None
    ) -> list[UserRoleResult]:
        return await self._user_role_repo.get_by_user_id(user_id, module)

    async def user_has_role(
        self, user_id: str, role_id: str, module: str | None = None
    ) -> bool:
        return await self._user_role_repo.exists(user_id, role_id, module)
