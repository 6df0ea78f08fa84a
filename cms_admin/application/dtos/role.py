"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CreateRoleRequest:
    """Input for RoleService.create. Roles start active."""

    name: str
    display_name: str | None = None
    description: str | None = None
    module: str | None = None
    display_order: int | None = None


@dataclass(frozen=True)
class UpdateRoleRequest:
    """Input for RoleService.update. The role name is never changed."""

    id: str
    display_name: str | None = None
    description: str | None = None
    module: str | None = None
    display_order: int | None = None
    is_active: bool = True


@dataclass(frozen=True)
class RoleResult:
    """Role read-model."""

    id: str
    name: str
    display_name: str | None
    description: str | None
    module: str | None
    display_order: int | None
    is_active: bool
    is_system: bool
    is_deleted: bool
    created_at: datetime | None = None
    created_by_user_id: str | None = None
    modified_at: datetime | None = None
    modified_by_user_id: str | None = None

    @property
    def label(self) -> str:
        """Display name, falling back to name when empty."""
        return self.display_name or self.name


@dataclass(frozen=True)
class RoleListResult:
    """One page of roles plus the total count of matching rows."""

    total_count: int
    roles: list[RoleResult] = field(default_factory=list)
