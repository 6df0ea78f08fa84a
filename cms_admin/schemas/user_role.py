"""User-role assignment API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserRoleAssign(BaseModel):
    """Request body for assigning a role to a user."""

    role_id: str = Field(..., min_length=1)
    module: str | None = Field(default=None, max_length=64)


class UserRoleResponse(BaseModel):
    """A role held by a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    role_id: str
    role_name: str
    role_display_name: str | None
    module: str | None
    is_system_assigned: bool
    assigned_at: datetime | None = None
    position: int = Field(default=0, description="Assignment order; 0 is the primary role")


class AssignmentChangedResponse(BaseModel):
    """Result of an idempotent assign/unassign: changed is False when nothing happened."""

    changed: bool


class PrimaryRoleResponse(BaseModel):
    """Primary (earliest assigned) role of a user, or null."""

    user_id: str
    role_id: str | None
