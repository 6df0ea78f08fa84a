"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Read methods return application DTOs; get_entity_* methods return the stored
entity for write paths and are typed loosely so no infrastructure import is needed.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from cms_admin.application.dtos.paging import ListQuery
    from cms_admin.application.dtos.permission import PermissionResult
    from cms_admin.application.dtos.role import RoleResult
    from cms_admin.application.dtos.user_role import (
        RolePermissionResult,
        UserRoleResult,
    )


class ISoftDeletableRepository(Protocol):
    """Write-side operations shared by Role and Permission repositories."""

    async def get_entity_by_id(self, entity_id: str) -> Any | None:
        """Return the stored entity (deleted rows included), or None."""

    async def update(self, obj: Any) -> Any:
        """Flush changes to an entity."""

    async def delete(self, obj: Any) -> None:
        """Physically delete the entity."""

    async def mark_deleted(self, obj: Any, user_id: str) -> Any:
        """Set is_deleted and stamp audit fields."""

    async def mark_restored(self, obj: Any, user_id: str) -> Any:
        """Clear is_deleted and stamp audit fields."""

    async def save_changes(self) -> None:
        """Commit the unit of work."""


# Permission repository interface
class IPermissionRepository(ISoftDeletableRepository, Protocol):
    """Protocol for permission repository (DIP)."""

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        """Return permission by id if it exists; otherwise None."""

    async def get_by_name(self, name: str) -> PermissionResult | None:
        """Return permission by exact name if it exists; otherwise None."""

    async def get_all(self, module: str | None = None) -> list[PermissionResult]:
        """Return non-deleted permissions ordered by name."""

    async def get_deleted(self) -> list[PermissionResult]:
        """Return soft-deleted permissions."""

    async def get_paged(self, params: ListQuery) -> tuple[int, list[PermissionResult]]:
        """Return (total_count, page) of non-deleted permissions."""

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
        """Create a permission; return created read-model DTO."""

    async def update_permission(self, permission: Any) -> Any:
        """Flush edits to a permission entity; a name clash raises DuplicateAssignmentException."""


# Role repository interface
class IRoleRepository(ISoftDeletableRepository, Protocol):
    """Protocol for role repository (DIP)."""

    async def get_by_id(self, role_id: str) -> RoleResult | None:
        """Return role by id if it exists; otherwise None."""

    async def get_by_name(self, name: str) -> RoleResult | None:
        """Return role by exact name if it exists; otherwise None."""

    async def get_active(self) -> list[RoleResult]:
        """Return active, non-deleted roles."""

    async def get_deleted(self) -> list[RoleResult]:
        """Return soft-deleted roles."""

    async def get_paged(self, params: ListQuery) -> tuple[int, list[RoleResult]]:
        """Return (total_count, page) of non-deleted roles."""

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
        """Create a role; return created read-model DTO."""

    async def set_active(self, role: Any, is_active: bool, user_id: str) -> Any:
        """Toggle is_active and stamp audit fields."""


# User role repository interface
class IUserRoleRepository(Protocol):
    """Protocol for user-role assignment repository (DIP)."""

    async def get_by_user_id(
        self, user_id: str, module: str | None = None
    ) -> list[UserRoleResult]:
        """Return assignments of a user ordered by position, then assigned_at and id."""

    async def get_role_ids_by_user_id(self, user_id: str) -> list[str]:
        """Return role ids held by the user."""

    async def get_first_role_id(self, user_id: str) -> str | None:
        """Return the role id of the lowest-position assignment, or None."""

    async def exists(self, user_id: str, role_id: str, module: str | None = None) -> bool:
        """Return True if the (user, role, module) assignment exists."""

    async def assign_role_to_user(
        self,
        user_id: str,
        role_id: str,
        *,
        module: str | None = None,
        is_system_assigned: bool = False,
    ) -> UserRoleResult:
        """Create an assignment."""

    async def remove_role_from_user(
        self, user_id: str, role_id: str, module: str | None = None
    ) -> bool:
        """Delete an assignment; return False if it did not exist."""


# Role permission repository interface
class IRolePermissionRepository(Protocol):
    """Protocol for role-permission assignment repository (DIP)."""

    async def get_by_role_id(
        self, role_id: str, module: str | None = None
    ) -> list[RolePermissionResult]:
        """Return grants of a role, optionally of one module."""

    async def get_permission_names_for_roles(self, role_ids: Sequence[str]) -> list[str]:
        """Return distinct permission names granted to any of role_ids."""

    async def does_any_role_have_permission(
        self,
        role_ids: Sequence[str],
        permission_name: str,
        full_admin_permission: str,
        module: str | None = None,
    ) -> bool:
        """Return True if any role grants the permission or the full-admin permission.

        A module narrows the check to grants stored for exactly that module.
        """

    async def get_assignment(
        self, role_id: str, permission_id: str, module: str | None = None
    ) -> Any | None:
        """Return the stored (role, permission, module) grant, or None."""

    async def assign_permission_to_role(
        self,
        role_id: str,
        permission_id: str,
        *,
        module: str | None = None,
        is_system_permission: bool = False,
        created_by_user_id: str | None = None,
    ) -> RolePermissionResult:
        """Create a grant."""

    async def remove(self, rp: Any) -> None:
        """Delete a grant."""
