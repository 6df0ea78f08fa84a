"""Role API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoleCreateRequest(BaseModel):
    """Request body for creating a role."""

    name: str = Field(..., min_length=1, max_length=128)
    display_name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    module: str | None = Field(default=None, max_length=64)
    display_order: int | None = None


class RoleUpdateRequest(BaseModel):
    """Request body for updating a role. The name is immutable."""

    display_name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    module: str | None = Field(default=None, max_length=64)
    display_order: int | None = None
    is_active: bool = True


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str | None
    label: str
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


class RoleListResponse(BaseModel):
    """One page of roles and the total number of matches."""

    total_count: int
    items: list[RoleResponse]


class RolePermissionAssign(BaseModel):
    """Request body for granting a permission to a role."""

    permission_id: str = Field(..., min_length=1)
    module: str | None = Field(default=None, max_length=64)


class RolePermissionResponse(BaseModel):
    """A permission granted to a role."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    role_id: str
    permission_id: str
    permission_name: str
    module: str | None
    is_system_permission: bool
