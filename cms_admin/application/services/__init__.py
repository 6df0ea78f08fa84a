"""Application services: business rules over the repository ports."""

from cms_admin.application.services.authorization_service import AuthorizationService
from cms_admin.application.services.permission_service import PermissionService
from cms_admin.application.services.role_permission_service import (
    RolePermissionService,
)
from cms_admin.application.services.role_service import RoleService
from cms_admin.application.services.user_role_service import UserRoleService

__all__ = [
    "AuthorizationService",
    "PermissionService",
    "RolePermissionService",
    "RoleService",
    "UserRoleService",
]
