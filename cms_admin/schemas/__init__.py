"""Pydantic request/response schemas for the API."""

from cms_admin.schemas.authorization import (
    PermissionCheckResponse,
    UserPermissionsResponse,
)
from cms_admin.schemas.health import HealthResponse
from cms_admin.schemas.permission import (
    PermissionCreateRequest,
    PermissionListResponse,
    PermissionResponse,
    PermissionUpdateRequest,
)
from cms_admin.schemas.role import (
    RoleCreateRequest,
    RoleListResponse,
    RolePermissionAssign,
    RolePermissionResponse,
    RoleResponse,
    RoleUpdateRequest,
)
from cms_admin.schemas.user_role import (
    AssignmentChangedResponse,
    PrimaryRoleResponse,
    UserRoleAssign,
    UserRoleResponse,
)

__all__ = [
    "AssignmentChangedResponse",
    "HealthResponse",
    "PermissionCheckResponse",
    "PermissionCreateRequest",
    "PermissionListResponse",
    "PermissionResponse",
    "PermissionUpdateRequest",
    "PrimaryRoleResponse",
    "RoleCreateRequest",
    "RoleListResponse",
    "RolePermissionAssign",
    "RolePermissionResponse",
    "RoleResponse",
    "RoleUpdateRequest",
    "UserPermissionsResponse",
    "UserRoleAssign",
    "UserRoleResponse",
]
