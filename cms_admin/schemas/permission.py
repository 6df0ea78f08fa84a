"""Permission API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PermissionCreateRequest(BaseModel):
    """Request body for creating a permission."""

    name: str = Field(..., min_length=1, max_length=128)
    display_name: str | None = Field(default=None, max_length=255)
    module: str | None = Field(default=None, max_length=64)
    description: str | None = Field(default=None, max_length=1000)


class PermissionUpdateRequest(BaseModel):
    """Request body for updating a permission. System permissions must keep their name."""

    name: str = Field(..., min_length=1, max_length=128)
    display_name: str | None = Field(default=None, max_length=255)
    module: str | None = Field(default=None, max_length=64)
    description: str | None = Field(default=None, max_length=1000)


class PermissionResponse(BaseModel):
    """Permission list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str | None
    label: str
    module: str | None
    description: str | None
    is_system: bool
    is_deleted: bool
    created_at: datetime | None = None
    modified_at: datetime | None = None
    modified_by_user_id: str | None = None


class PermissionListResponse(BaseModel):
    """One page of permissions and the total number of matches."""

    total_count: int
    items: list[PermissionResponse]
