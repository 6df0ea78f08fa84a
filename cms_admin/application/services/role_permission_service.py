"""Role-permission mapping service: idempotent grant/revoke and listing."""

from __future__ import annotations

from cms_admin.application.dtos.user_role import RolePermissionResult
from cms_admin.application.interfaces.repositories import (
    IPermissionRepository,
    IRolePermissionRepository,
    IRoleRepository,
    IUserRoleRepository,
)
from cms_admin.core.modules import ModuleRegistry
from cms_admin.domain.exceptions import BusinessRuleException, ResourceNotFoundException
from cms_admin.shared.logging import get_logger

logger = get_logger(__name__)

_MSG_SYSTEM_GRANT = "System permission grants cannot be removed."


class RolePermissionService:
    """Grant permissions to roles. A (role, permission, module) triple is granted at most once."""

    def __init__(
        self,
        role_permission_repo: IRolePermissionRepository,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
        user_role_repo: IUserRoleRepository,
        *,
        modules: ModuleRegistry | None = None,
    ) -> None:
        self._role_permission_repo = role_permission_repo
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._user_role_repo = user_role_repo
        self._modules = modules or ModuleRegistry()

    async def assign_permission(
        self,
        role_id: str,
        permission_id: str,
        performed_by: str,
        module: str | None = None,
        *,
        is_system_permission: bool = False,
    ) -> bool:
        """Grant permission to role. Return False when the grant already existed.

        Raises:
            ResourceNotFoundException: If role or permission is missing or soft-deleted.
            ValidationException: If module is not registered.
        """
        module = self._modules.validate(module)
        role = await self._role_repo.get_by_id(role_id)
        if role is None or role.is_deleted:
            raise ResourceNotFoundException("Role", role_id)
        permission = await self._permission_repo.get_by_id(permission_id)
        if permission is None or permission.is_deleted:
            raise ResourceNotFoundException("Permission", permission_id)
        if await self._role_permission_repo.get_assignment(role_id, permission_id, module):
            return False
        await self._role_permission_repo.assign_permission_to_role(
            role_id,
            permission_id,
            module=module,
            is_system_permission=is_system_permission,
            created_by_user_id=performed_by,
        )
        logger.info(
            "Permission %s granted to role %s by %s", permission.name, role.name, performed_by
        )
        return True

    async def unassign_permission(
        self, role_id: str, permission_id: str, module: str | None = None
    ) -> bool:
        """Revoke a grant. Return False when absent; system grants raise BusinessRuleException."""
        grant = await self._role_permission_repo.get_assignment(
            role_id, permission_id, self._modules.validate(module)
        )
        if grant is None:
            return False
        if grant.is_system_permission:
            logger.warning(
                "Rejected removal of system grant %s from role %s", permission_id, role_id
            )
            raise BusinessRuleException(
                _MSG_SYSTEM_GRANT, role_id=role_id, permission_id=permission_id
            )
        await self._role_permission_repo.remove(grant)
        logger.info("Permission %s revoked from role %s", permission_id, role_id)
        return True

    async def get_permissions_for_role(
        self, role_id: str, module: str | None = None
    ) -> list[RolePermissionResult]:
        return await self._role_permission_repo.get_by_role_id(role_id, module)

    async def get_permission_names_for_user(self, user_id: str) -> list[str]:
        """Distinct permission names across all the user's roles."""
        role_ids = await self._user_role_repo.get_role_ids_by_user_id(user_id)
        return await self._role_permission_repo.get_permission_names_for_roles(role_ids)
