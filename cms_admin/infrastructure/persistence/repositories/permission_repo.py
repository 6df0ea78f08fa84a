"""Permission repository. Read methods return PermissionResult; entity getters return ORM for writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.application.dtos.paging import ListQuery
from cms_admin.application.dtos.permission import PermissionResult
from cms_admin.domain.exceptions import DuplicateAssignmentException
from cms_admin.infrastructure.persistence.models.permission import Permission
from cms_admin.infrastructure.persistence.repositories.base import (
    SoftDeletableRepository,
)
from cms_admin.shared.enums import PermissionSortColumn


def permission_to_result(p: Permission) -> PermissionResult:
    """Map ORM Permission to application PermissionResult."""
    return PermissionResult(
        id=p.id,
        name=p.name,
        display_name=p.display_name,
        module=p.module,
        description=p.description,
        is_system=p.is_system,
        is_deleted=p.is_deleted,
        created_at=p.created_at,
        modified_at=p.modified_at,
        modified_by_user_id=p.modified_by_user_id,
    )


class PermissionRepository(SoftDeletableRepository[Permission]):
    """Permission repository with soft delete, recycle bin and paged listing."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    def _sort_columns(self) -> dict[str, Any]:
        return {
            PermissionSortColumn.NAME.value: Permission.name,
            PermissionSortColumn.DISPLAY_NAME.value: Permission.display_name,
            PermissionSortColumn.IS_SYSTEM.value: Permission.is_system,
        }

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        """Return permission by id (deleted rows included), or None."""
        orm = await self.get_entity_by_id(permission_id)
        return permission_to_result(orm) if orm else None

    async def get_entity_by_name(self, name: str) -> Permission | None:
        result = await self.db.execute(self.query().where(Permission.name == name))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> PermissionResult | None:
        """Return permission by exact name (deleted rows included), or None."""
        orm = await self.get_entity_by_name(name)
        return permission_to_result(orm) if orm else None

    async def get_all(self, module: str | None = None) -> list[PermissionResult]:
        """Return all non-deleted permissions, optionally only those of one module."""
        stmt = self._not_deleted().order_by(Permission.name)
        if module:
            stmt = stmt.where(Permission.module == module)
        result = await self.db.execute(stmt)
        return [permission_to_result(p) for p in result.scalars().all()]

    async def get_deleted(self) -> list[PermissionResult]:
        return [permission_to_result(p) for p in await self.list_deleted()]

    async def get_paged(self, params: ListQuery) -> tuple[int, list[PermissionResult]]:
        total, rows = await self.page(params)
        return total, [permission_to_result(p) for p in rows]

    async def create_permission(
        self,
        name: str,
        *,
        display_name: str | None = None,
        module: str | None = None,
        description: str | None = None,
        is_system: bool = False,
        created_by_user_id: str | None = None,
    ) -> PermissionResult:
        """Insert a permission. Raises DuplicateAssignmentException on a name clash."""
        permission = Permission(
            name=name,
            display_name=display_name,
            module=module,
            description=description,
            is_system=is_system,
            is_deleted=False,
            created_by_user_id=created_by_user_id,
        )
        try:
            created = await self.add(permission)
        except IntegrityError:
            raise DuplicateAssignmentException(
                f"Permission '{name}' already exists",
                assignment_type="permission",
                details_extra={"name": name},
            ) from None
        return permission_to_result(created)

    async def update_permission(self, permission: Permission) -> Permission:
        """Flush edits to a permission. Raises DuplicateAssignmentException on a name clash."""
        name = permission.name
        try:
            return await self.update(permission)
        except IntegrityError:
            raise DuplicateAssignmentException(
                f"Permission '{name}' already exists",
                assignment_type="permission",
                details_extra={"name": name},
            ) from None
