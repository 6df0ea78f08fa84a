"""Permission application service: CRUD, recycle bin and paged listing with system-permission guards."""

from __future__ import annotations

from cms_admin.application.dtos.paging import ListQuery
from cms_admin.application.dtos.permission import (
    CreatePermissionRequest,
    PermissionListResult,
    PermissionResult,
    UpdatePermissionRequest,
)
from cms_admin.application.interfaces.repositories import IPermissionRepository
from cms_admin.domain.exceptions import (
    BusinessRuleException,
    ResourceNotFoundException,
    ValidationException,
)
from cms_admin.shared.logging import get_logger
from cms_admin.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_MSG_DUPLICATE_PERMISSION = "Permission with name '%s' already exists"
_MSG_SYSTEM_RENAME = "System permissions cannot be renamed."
_MSG_SYSTEM_DELETE = "System permissions cannot be deleted."


def _clean_name(name: str | None) -> str:
    value = (name or "").strip()
    if not value:
        raise ValidationException("Permission name is required", field="name")
    return value


class PermissionService:
    """Permission lifecycle. System permissions can never be renamed or deleted."""

    def __init__(self, permission_repo: IPermissionRepository) -> None:
        self._repo = permission_repo

    async def get_all(self) -> list[PermissionResult]:
        return await self._repo.get_all(module=None)

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        return await self._repo.get_by_id(permission_id)

    async def get_by_name(self, name: str) -> PermissionResult | None:
        return await self._repo.get_by_name(name)

    async def create(
        self, request: CreatePermissionRequest, created_by: str
    ) -> PermissionResult:
        """Create a non-system permission. Raises ValidationException if the name is taken."""
        name = _clean_name(request.name)
        # Best-effort check; the unique constraint on name is the real guard.
        if await self._repo.get_by_name(name):
            raise ValidationException(_MSG_DUPLICATE_PERMISSION % name, field="name")
        created = await self._repo.create_permission(
            name,
            display_name=request.display_name,
            module=request.module,
            description=request.description,
            is_system=False,
            created_by_user_id=created_by,
        )
        logger.info("Permission created: %s (%s) by %s", created.name, created.id, created_by)
        return created

    async def update(
        self, request: UpdatePermissionRequest, modified_by: str
    ) -> PermissionResult:
        """Update name, display name, module and description.

        Raises:
            ResourceNotFoundException: If the permission does not exist.
            BusinessRuleException: If a system permission would be renamed.
            ValidationException: If the new name is empty or already taken.
            DuplicateAssignmentException: If a concurrent writer took the name first.
        """
        permission = await self._repo.get_entity_by_id(request.id)
        if permission is None:
            raise ResourceNotFoundException("Permission", request.id)
        name = _clean_name(request.name)
        if name != permission.name:
            if permission.is_system:
                logger.warning(
                    "Rejected rename of system permission %s by %s",
                    permission.name,
                    modified_by,
                )
                raise BusinessRuleException(_MSG_SYSTEM_RENAME, permission_id=request.id)
            if await self._repo.get_by_name(name):
                raise ValidationException(_MSG_DUPLICATE_PERMISSION % name, field="name")
        permission.name = name
        permission.display_name = request.display_name
        permission.module = request.module
        permission.description = request.description
        permission.modified_at = utc_now()
        permission.modified_by_user_id = modified_by
        await self._repo.update_permission(permission)
        logger.info("Permission updated: %s (%s) by %s", name, request.id, modified_by)
        result = await self._repo.get_by_id(request.id)
        if result is None:
            raise ResourceNotFoundException("Permission", request.id)
        return result

    async def soft_delete(self, permission_id: str, user_id: str) -> None:
        """Move a permission to the recycle bin. System permissions are rejected."""
        permission = await self._repo.get_entity_by_id(permission_id)
        if permission is None:
            raise ResourceNotFoundException("Permission", permission_id)
        if permission.is_system:
            logger.warning(
                "Rejected soft delete of system permission %s by %s",
                permission.name,
                user_id,
            )
            raise BusinessRuleException(_MSG_SYSTEM_DELETE, permission_id=permission_id)
        await self._repo.mark_deleted(permission, user_id)
        logger.info("Permission soft-deleted: %s (%s) by %s", permission.name, permission_id, user_id)

    async def restore(self, permission_id: str, user_id: str) -> None:
        permission = await self._repo.get_entity_by_id(permission_id)
        if permission is None:
            raise ResourceNotFoundException("Permission", permission_id)
        await self._repo.mark_restored(permission, user_id)
        logger.info("Permission restored: %s (%s) by %s", permission.name, permission_id, user_id)

    async def hard_delete(self, permission_id: str) -> None:
        """Physically remove a permission and its role grants. Missing ids are a no-op."""
        permission = await self._repo.get_entity_by_id(permission_id)
        if permission is None:
            logger.debug("Hard delete of missing permission %s ignored", permission_id)
            return
        if permission.is_system:
            logger.warning("Rejected hard delete of system permission %s", permission.name)
            raise BusinessRuleException(_MSG_SYSTEM_DELETE, permission_id=permission_id)
        await self._repo.delete(permission)
        logger.info("Permission hard-deleted: %s (%s)", permission.name, permission_id)

    async def get_deleted(self) -> list[PermissionResult]:
        return await self._repo.get_deleted()

    async def get_paged_list(
        self,
        search: str | None = None,
        sort_column: str | None = None,
        sort_direction: str | None = None,
        skip: int = 0,
        take: int = 20,
    ) -> PermissionListResult:
        """Search non-deleted permissions by name/display name, sort and page."""
        params = ListQuery.build(search, sort_column, sort_direction, skip, take)
        total, items = await self._repo.get_paged(params)
        return PermissionListResult(total_count=total, permissions=items)
