"""Application DTOs (no ORM dependency)."""

from cms_admin.application.dtos.paging import ListQuery
from cms_admin.application.dtos.permission import (
    CreatePermissionRequest,
    PermissionListResult,
    PermissionResult,
    UpdatePermissionRequest,
)
from cms_admin.application.dtos.role import (
    CreateRoleRequest,
    RoleListResult,
    RoleResult,
    UpdateRoleRequest,
)
from cms_admin.application.dtos.user_role import RolePermissionResult, UserRoleResult

__all__ = [
    "CreatePermissionRequest",
    "CreateRoleRequest",
    "ListQuery",
    "PermissionListResult",
    "PermissionResult",
    "RoleListResult",
    "RolePermissionResult",
    "RoleResult",
    "UpdatePermissionRequest",
    "UpdateRoleRequest",
    "UserRoleResult",
]
