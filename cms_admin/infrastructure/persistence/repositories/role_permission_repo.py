"""RolePermission repository: role-permission assignments and the database permission check."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.application.dtos.user_role import RolePermissionResult
from cms_admin.domain.exceptions import DuplicateAssignmentException
from cms_admin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
)
from cms_admin.infrastructure.persistence.models.role import Role


def role_permission_to_result(
    rp: RolePermission, permission_name: str
) -> RolePermissionResult:
    return RolePermissionResult(
        id=rp.id,
        role_id=rp.role_id,
        permission_id=rp.permission_id,
        permission_name=permission_name,
        module=rp.module,
        is_system_permission=rp.is_system_permission,
    )


class RolePermissionRepository:
    """Role-permission link table only. Assign/remove and query permissions for roles."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_role_id(
        self, role_id: str, module: str | None = None
    ) -> list[RolePermissionResult]:
        """Grants of a role (optionally of one module), skipping permissions in the recycle bin."""
        stmt = (
            select(RolePermission, Permission.name)
            .join(Permission, RolePermission.permission_id == Permission.id)
            .where(
                RolePermission.role_id == role_id,
                Permission.is_deleted.is_(False),
            )
            .order_by(Permission.name, RolePermission.id)
        )
        if module is not None:
            stmt = stmt.where(RolePermission.module == module)
        result = await self.db.execute(stmt)
        return [role_permission_to_result(rp, name) for rp, name in result.all()]

    async def get_permission_names_for_roles(self, role_ids: Sequence[str]) -> list[str]:
        """Distinct live permission names granted to any live role in role_ids."""
        if not role_ids:
            return []
        result = await self.db.execute(
            select(Permission.name)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .join(Role, RolePermission.role_id == Role.id)
            .where(
                RolePermission.role_id.in_(list(role_ids)),
                Permission.is_deleted.is_(False),
                Role.is_deleted.is_(False),
            )
            .distinct()
            .order_by(Permission.name)
        )
        return list(result.scalars().all())

    async def does_any_role_have_permission(
        self,
        role_ids: Sequence[str],
        permission_name: str,
        full_admin_permission: str,
        module: str | None = None,
    ) -> bool:
        """True if any role grants permission_name or the full-admin permission.

        With module set, only grants stored for exactly that module count.
        Soft-deleted roles and permissions grant nothing. Inactive roles still do.
        """
        if not role_ids:
            return False
        conditions = [
            RolePermission.role_id.in_(list(role_ids)),
            Permission.name.in_([permission_name, full_admin_permission]),
            Permission.is_deleted.is_(False),
            Role.is_deleted.is_(False),
        ]
        if module is not None:
            conditions.append(RolePermission.module == module)
        stmt = select(
            exists()
            .where(RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == Role.id)
            .where(*conditions)
        )
        return bool(await self.db.scalar(stmt))

    async def get_assignment(
        self, role_id: str, permission_id: str, module: str | None = None
    ) -> RolePermission | None:
        # NULL module is the global grant; '=' never matches NULL.
        module_clause = (
            RolePermission.module.is_(None)
            if module is None
            else RolePermission.module == module
        )
        result = await self.db.execute(
            select(RolePermission).where(
                RolePermission.role_id == role_id,
                RolePermission.permission_id == permission_id,
                module_clause,
            )
        )
        return result.scalars().first()

    async def exists(
        self, role_id: str, permission_id: str, module: str | None = None
    ) -> bool:
        return await self.get_assignment(role_id, permission_id, module) is not None

    async def assign_permission_to_role(
        self,
        role_id: str,
        permission_id: str,
        *,
        module: str | None = None,
        is_system_permission: bool = False,
        created_by_user_id: str | None = None,
    ) -> RolePermissionResult:
        rp = RolePermission(
            role_id=role_id,
            permission_id=permission_id,
            module=module,
            is_system_permission=is_system_permission,
            created_by_user_id=created_by_user_id,
        )
        try:
            self.db.add(rp)
            await self.db.flush()
            await self.db.refresh(rp)
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Permission already assigned to role",
                assignment_type="role_permission",
                details_extra={"role_id": role_id, "permission_id": permission_id},
            ) from None
        permission = await self.db.get(Permission, permission_id)
        return role_permission_to_result(rp, permission.name if permission else "")

    async def remove(self, rp: RolePermission) -> None:
        await self.db.delete(rp)
        await self.db.flush()
