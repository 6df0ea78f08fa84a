"""Role application service: CRUD, activation, recycle bin, paging and primary-role lookup."""

from __future__ import annotations

from cms_admin.application.dtos.paging import ListQuery
from cms_admin.application.dtos.role import (
    CreateRoleRequest,
    RoleListResult,
    RoleResult,
    UpdateRoleRequest,
)
from cms_admin.application.interfaces.repositories import (
    IRoleRepository,
    IUserRoleRepository,
)
from cms_admin.core.modules import ModuleRegistry
from cms_admin.domain.exceptions import (
    BusinessRuleException,
    ResourceNotFoundException,
    ValidationException,
)
from cms_admin.shared.logging import get_logger
from cms_admin.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_MSG_DUPLICATE_ROLE = "Role with name '%s' already exists"
_MSG_SYSTEM_ROLE_DELETE = "System roles cannot be deleted."


class RoleService:
    """Role lifecycle.

    System roles are deletable unless protect_system_roles is set, in which case
    delete and soft_delete reject them the same way system permissions are rejected.
    """

    def __init__(
        self,
        role_repo: IRoleRepository,
        user_role_repo: IUserRoleRepository,
        *,
        modules: ModuleRegistry | None = None,
        protect_system_roles: bool = False,
    ) -> None:
        self._role_repo = role_repo
        self._user_role_repo = user_role_repo
        self._modules = modules or ModuleRegistry()
        self._protect_system_roles = protect_system_roles

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        return await self._role_repo.get_by_id(role_id)

    async def get_by_name(self, name: str) -> RoleResult | None:
        return await self._role_repo.get_by_name(name)

    async def get_all_roles(self) -> list[RoleResult]:
        """Active, non-deleted roles for dropdowns."""
        return await self._role_repo.get_active()

    async def get_primary_role_id_for_user(self, user_id: str) -> str | None:
        """Role id of the user's first assignment by position, or None.

        Each new assignment gets the next position for that user, so the first role
        assigned stays primary. assigned_at and id only order rows of equal position.

        Role activation is ignored: deactivating a role does not touch assignments.
        """
        return await self._user_role_repo.get_first_role_id(user_id)

    async def create(self, request: CreateRoleRequest, performed_by: str) -> RoleResult:
        """Create an active, non-system role. Raises ValidationException on empty/taken name or unknown module."""
        name = (request.name or "").strip()
        if not name:
            raise ValidationException("Role name is required", field="name")
        module = self._modules.validate(request.module)
        if await self._role_repo.get_by_name(name):
            raise ValidationException(_MSG_DUPLICATE_ROLE % name, field="name")
        created = await self._role_repo.create_role(
            name,
            display_name=request.display_name,
            description=request.description,
            module=module,
            display_order=request.display_order,
            is_active=True,
            created_by_user_id=performed_by,
        )
        logger.info("Role created: %s (%s) by %s", created.name, created.id, performed_by)
        return created

    async def update(self, request: UpdateRoleRequest, performed_by: str) -> RoleResult:
        """Update display info, module, display order and active flag. The name never changes.

        Raises:
            ResourceNotFoundException: If the role does not exist.
            ValidationException: If module is not registered.
        """
        role = await self._role_repo.get_entity_by_id(request.id)
        if role is None:
            raise ResourceNotFoundException("Role", request.id)
        module = self._modules.validate(request.module)
        role.display_name = request.display_name
        role.description = request.description
        role.module = module
        role.display_order = request.display_order
        role.modified_at = utc_now()
        role.modified_by_user_id = performed_by
        if role.is_active != request.is_active:
            await self._role_repo.set_active(role, request.is_active, performed_by)
            logger.info(
                "Role %s: %s by %s",
                "activated" if request.is_active else "deactivated",
                role.name,
                performed_by,
            )
        await self._role_repo.update(role)
        logger.info("Role updated: %s (%s) by %s", role.name, request.id, performed_by)
        result = await self._role_repo.get_by_id(request.id)
        if result is None:
            raise ResourceNotFoundException("Role", request.id)
        return result

    def _guard_system_role(self, role, action: str) -> None:
        if self._protect_system_roles and role.is_system:
            logger.warning("Rejected %s of system role %s", action, role.name)
            raise BusinessRuleException(_MSG_SYSTEM_ROLE_DELETE, role_id=role.id)

    async def delete(self, role_id: str) -> None:
        """Hard delete; user and permission assignments cascade. Raises ResourceNotFoundException if absent."""
        role = await self._role_repo.get_entity_by_id(role_id)
        if role is None:
            raise ResourceNotFoundException("Role", role_id)
        self._guard_system_role(role, "delete")
        await self._role_repo.delete(role)
        logger.info("Role deleted: %s (%s)", role.name, role_id)

    async def soft_delete(self, role_id: str, user_id: str) -> None:
        role = await self._role_repo.get_entity_by_id(role_id)
        if role is None:
            raise ResourceNotFoundException("Role", role_id)
        self._guard_system_role(role, "soft delete")
        await self._role_repo.mark_deleted(role, user_id)
        logger.info("Role soft-deleted: %s (%s) by %s", role.name, role_id, user_id)

    async def restore(self, role_id: str, user_id: str) -> None:
        role = await self._role_repo.get_entity_by_id(role_id)
        if role is None:
            raise ResourceNotFoundException("Role", role_id)
        await self._role_repo.mark_restored(role, user_id)
        logger.info("Role restored: %s (%s) by %s", role.name, role_id, user_id)

    async def get_deleted(self) -> list[RoleResult]:
        return await self._role_repo.get_deleted()

    async def get_paged_list(
        self,
        search: str | None = None,
        sort_column: str | None = None,
        sort_direction: str | None = None,
        skip: int = 0,
        take: int = 20,
    ) -> RoleListResult:
        """Search non-deleted roles by name/display name, sort by name|displayname|createdat and page."""
        params = ListQuery.build(search, sort_column, sort_direction, skip, take)
        total, items = await self._role_repo.get_paged(params)
        return RoleListResult(total_count=total, roles=items)
