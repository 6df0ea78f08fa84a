"""Authorization check API schemas."""

from pydantic import BaseModel, Field


class PermissionCheckResponse(BaseModel):
    """Result of a permission check."""

    permission: str
    user_id: str | None = Field(default=None, description="Checked user; null for an anonymous caller")
    granted: bool
    source: str = Field(..., description="'claims' or 'database'")


class UserPermissionsResponse(BaseModel):
    """Permission names a user holds through their roles."""

    user_id: str
    permissions: list[str]
