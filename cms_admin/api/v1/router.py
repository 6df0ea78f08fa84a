"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from cms_admin.api.v1.dependencies.
"""

from fastapi import APIRouter

from cms_admin.api.v1.endpoints import (
    authorization,
    health,
    permissions,
    roles,
    user_roles,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(user_roles.router, prefix="/users", tags=["user-roles"])
api_router.include_router(
    authorization.router, prefix="/authorization", tags=["authorization"]
)
