"""UserRole repository: user-role assignments (single entity responsibility)."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.application.dtos.user_role import UserRoleResult
from cms_admin.domain.exceptions import DuplicateAssignmentException
from cms_admin.infrastructure.persistence.models.permission import UserRole
from cms_admin.infrastructure.persistence.models.role import Role


def user_role_to_result(ur: UserRole, role: Role) -> UserRoleResult:
    return UserRoleResult(
        id=ur.id,
        user_id=ur.user_id,
        role_id=ur.role_id,
        role_name=role.name,
        role_display_name=role.display_name,
        module=ur.module,
        is_system_assigned=ur.is_system_assigned,
        assigned_at=ur.assigned_at,
        position=ur.position,
    )


# Explicit position first; assigned_at and id only break ties between equal positions.
_ASSIGNMENT_ORDER = (UserRole.position, UserRole.assigned_at, UserRole.id)


def _module_clause(module: str | None):
    # NULL module is the global scope; '=' never matches NULL.
    return UserRole.module.is_(None) if module is None else UserRole.module == module


class UserRoleRepository:
    """User-role link table only. Assign/remove and list roles for a user."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _for_user(self, user_id: str):
        return (
            select(UserRole, Role)
            .join(Role, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id, Role.is_deleted.is_(False))
            .order_by(*_ASSIGNMENT_ORDER)
        )

    async def get_by_user_id(
        self, user_id: str, module: str | None = None
    ) -> list[UserRoleResult]:
        """Assignments of a user in assignment order; roles in the recycle bin are skipped."""
        stmt = self._for_user(user_id)
        if module is not None:
            stmt = stmt.where(UserRole.module == module)
        result = await self.db.execute(stmt)
        return [user_role_to_result(ur, role) for ur, role in result.all()]

    async def get_role_ids_by_user_id(self, user_id: str) -> list[str]:
        """Role ids held by the user in assignment order, without duplicates."""
        result = await self.db.execute(
            select(UserRole.role_id)
            .join(Role, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id, Role.is_deleted.is_(False))
            .order_by(*_ASSIGNMENT_ORDER)
        )
        return list(dict.fromkeys(result.scalars().all()))

    async def get_first_role_id(self, user_id: str) -> str | None:
        """Role id of the lowest-position assignment, or None."""
        result = await self.db.execute(
            select(UserRole.role_id)
            .join(Role, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id, Role.is_deleted.is_(False))
            .order_by(*_ASSIGNMENT_ORDER)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_assignment(
        self, user_id: str, role_id: str, module: str | None = None
    ) -> UserRole | None:
        result = await self.db.execute(
            select(UserRole).where(
                UserRole.user_id == user_id,
                UserRole.role_id == role_id,
                _module_clause(module),
            )
        )
        return result.scalars().first()

    async def exists(
        self, user_id: str, role_id: str, module: str | None = None
    ) -> bool:
        return await self.get_assignment(user_id, role_id, module) is not None

    async def assign_role_to_user(
        self,
        user_id: str,
        role_id: str,
        *,
        module: str | None = None,
        is_system_assigned: bool = False,
    ) -> UserRoleResult:
        """Insert an assignment after the user's existing ones."""
        position = await self.db.scalar(
            select(func.coalesce(func.max(UserRole.position), -1) + 1).where(
                UserRole.user_id == user_id
            )
        )
        ur = UserRole(
            user_id=user_id,
            role_id=role_id,
            module=module,
            is_system_assigned=is_system_assigned,
            position=position or 0,
        )
        try:
            self.db.add(ur)
            await self.db.flush()
            await self.db.refresh(ur)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Role already assigned to user",
                assignment_type="user_role",
                details_extra={"user_id": user_id, "role_id": role_id},
            ) from None
        role = await self.db.get(Role, role_id)
        return user_role_to_result(ur, role)

    async def remove_role_from_user(
        self, user_id: str, role_id: str, module: str | None = None
    ) -> bool:
        ur = await self.get_assignment(user_id, role_id, module)
        if not ur:
            return False
        await self.db.delete(ur)
        await self.db.flush()
        return True
