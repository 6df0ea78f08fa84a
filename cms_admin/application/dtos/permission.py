"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CreatePermissionRequest:
    """Input for PermissionService.create. New permissions are never system-protected."""

    name: str
    display_name: str | None = None
    module: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class UpdatePermissionRequest:
    """Input for PermissionService.update (full replace of editable fields)."""

    id: str
    name: str
    display_name: str | None = None
    module: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model."""

    id: str
    name: str
    display_name: str | None
    module: str | None
    description: str | None
    is_system: bool
    is_deleted: bool
    created_at: datetime | None = None
    modified_at: datetime | None = None
    modified_by_user_id: str | None = None

    @property
    def label(self) -> str:
        """Display name, falling back to name when empty."""
        return self.display_name or self.name


@dataclass(frozen=True)
class PermissionListResult:
    """One page of permissions plus the total count of matching rows."""

    total_count: int
    permissions: list[PermissionResult] = field(default_factory=list)
