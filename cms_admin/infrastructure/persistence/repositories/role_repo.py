"""Role repository. Read methods return RoleResult (DTO); entity getters return ORM for writes."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.application.dtos.paging import ListQuery
from cms_admin.application.dtos.role import RoleResult
from cms_admin.domain.exceptions import DuplicateAssignmentException
from cms_admin.infrastructure.persistence.models.role import Role
from cms_admin.infrastructure.persistence.repositories.base import (
    SoftDeletableRepository,
)
from cms_admin.shared.enums import RoleSortColumn


def role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    return RoleResult(
        id=r.id,
        name=r.name,
        display_name=r.display_name,
        description=r.description,
        module=r.module,
        display_order=r.display_order,
        is_active=r.is_active,
        is_system=r.is_system,
        is_deleted=r.is_deleted,
        created_at=r.created_at,
        created_by_user_id=r.created_by_user_id,
        modified_at=r.modified_at,
        modified_by_user_id=r.modified_by_user_id,
    )


class RoleRepository(SoftDeletableRepository[Role]):
    """Role repository. Use get_entity_by_id for update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    def _sort_columns(self) -> dict[str, Any]:
        return {
            RoleSortColumn.NAME.value: Role.name,
            RoleSortColumn.DISPLAY_NAME.value: Role.display_name,
            RoleSortColumn.CREATED_AT.value: Role.created_at,
        }

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        orm = await self.get_entity_by_id(role_id)
        return role_to_result(orm) if orm else None

    async def get_entity_by_name(self, name: str) -> Role | None:
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> RoleResult | None:
        orm = await self.get_entity_by_name(name)
        return role_to_result(orm) if orm else None

    async def get_active(self) -> list[RoleResult]:
        """Return active, non-deleted roles ordered for dropdowns (display_order, then name)."""
        result = await self.db.execute(
            self._not_deleted()
            .where(Role.is_active.is_(True))
            .order_by(Role.display_order.is_(None), Role.display_order, Role.name)
        )
        return [role_to_result(r) for r in result.scalars().all()]

    async def get_deleted(self) -> list[RoleResult]:
        return [role_to_result(r) for r in await self.list_deleted()]

    async def get_paged(self, params: ListQuery) -> tuple[int, list[RoleResult]]:
        total, rows = await self.page(params)
        return total, [role_to_result(r) for r in rows]

    async def create_role(
        self,
        name: str,
        *,
        display_name: str | None = None,
        description: str | None = None,
        module: str | None = None,
        display_order: int | None = None,
        is_system: bool = False,
        is_active: bool = True,
        created_by_user_id: str | None = None,
    ) -> RoleResult:
        """Insert a role. Raises DuplicateAssignmentException on a name clash."""
        role = Role(
            name=name,
            display_name=display_name,
            description=description,
            module=module,
            display_order=display_order,
            is_system=is_system,
            is_active=is_active,
            is_deleted=False,
            created_by_user_id=created_by_user_id,
        )
        try:
            created = await self.add(role)
        except IntegrityError:
            raise DuplicateAssignmentException(
                f"Role '{name}' already exists",
                assignment_type="role",
                details_extra={"name": name},
            ) from None
        return role_to_result(created)

    async def set_active(self, role: Role, is_active: bool, user_id: str) -> Role:
        """Activate or deactivate a role and stamp modified_at/modified_by_user_id."""
        role.is_active = is_active
        self._touch(role, user_id)
        return role
