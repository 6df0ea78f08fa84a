"""Repositories: data access per aggregate, returning DTOs for reads."""

from cms_admin.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from cms_admin.infrastructure.persistence.repositories.role_permission_repo import (
    RolePermissionRepository,
)
from cms_admin.infrastructure.persistence.repositories.role_repo import RoleRepository
from cms_admin.infrastructure.persistence.repositories.user_role_repo import (
    UserRoleRepository,
)

__all__ = [
    "PermissionRepository",
    "RolePermissionRepository",
    "RoleRepository",
    "UserRoleRepository",
]
