"""Initial system data: system permissions, system roles and the admin grant."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.core.constants import (
    ADMINISTRATORS_ROLE,
    FULL_ADMIN_ACCESS_PERMISSION,
    SYSTEM_PERMISSIONS,
    SYSTEM_ROLES,
    SYSTEM_USER_ID,
)
from cms_admin.infrastructure.persistence.models.permission import (
    Permission,
    RolePermission,
    UserRole,
)
from cms_admin.infrastructure.persistence.models.role import Role
from cms_admin.shared.logging import get_logger
from cms_admin.shared.utils.ids import generate_id

logger = get_logger(__name__)


class InitialSystemDataSeeder:
    """Seeds an empty database. Does nothing once any permission or role exists."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _is_seeded(self) -> bool:
        for model in (Permission, Role):
            result = await self.db.execute(select(model.id).limit(1))
            if result.scalar_one_or_none() is not None:
                return True
        return False

    async def seed(self, admin_user_id: str | None = None) -> bool:
        """Create system rows; optionally assign admin_user_id to Administrators.

        Returns False when the database was already seeded.
        """
        if await self._is_seeded():
            logger.info("System data already present; seeding skipped")
            return False

        permission_ids: dict[str, str] = {}
        permissions = []
        for name, display_name in SYSTEM_PERMISSIONS.items():
            permission_ids[name] = generate_id()
            permissions.append(
                Permission(
                    id=permission_ids[name],
                    name=name,
                    display_name=display_name,
                    is_system=True,
                    is_deleted=False,
                    created_by_user_id=SYSTEM_USER_ID,
                )
            )

        role_ids: dict[str, str] = {}
        roles = []
        for order, (name, display_name) in enumerate(SYSTEM_ROLES.items()):
            role_ids[name] = generate_id()
            roles.append(
                Role(
                    id=role_ids[name],
                    name=name,
                    display_name=display_name,
                    display_order=order,
                    is_system=True,
                    is_active=True,
                    is_deleted=False,
                    created_by_user_id=SYSTEM_USER_ID,
                )
            )

        self.db.add_all(permissions)
        self.db.add_all(roles)
        await self.db.flush()
        self.db.add(
            RolePermission(
                role_id=role_ids[ADMINISTRATORS_ROLE],
                permission_id=permission_ids[FULL_ADMIN_ACCESS_PERMISSION],
                is_system_permission=True,
                created_by_user_id=SYSTEM_USER_ID,
            )
        )
        if admin_user_id:
            self.db.add(
                UserRole(
                    user_id=admin_user_id,
                    role_id=role_ids[ADMINISTRATORS_ROLE],
                    is_system_assigned=True,
                    position=0,
                )
            )
        await self.db.flush()
        logger.info(
            "Seeded %d system permissions and %d system roles", len(permissions), len(roles)
        )
        return True
