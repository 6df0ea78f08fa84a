"""DTOs for user-role and role-permission assignments."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRoleResult:
    """A role held by a user, optionally scoped to a module."""

    id: str
    user_id: str
    role_id: str
    role_name: str
    role_display_name: str | None
    module: str | None
    is_system_assigned: bool
    assigned_at: datetime | None = None
    position: int = 0


@dataclass(frozen=True)
class RolePermissionResult:
    """A permission granted to a role."""

    id: str
    role_id: str
    permission_id: str
    permission_name: str
    module: str | None
    is_system_permission: bool
