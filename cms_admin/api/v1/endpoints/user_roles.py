"""User-role assignments API: list, assign, unassign, primary role and effective permissions."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from cms_admin.api.v1.dependencies import (
    get_role_permission_service,
    get_role_service,
    get_user_role_service,
    get_user_role_service_for_write,
    require_permission,
)
from cms_admin.application.services.role_permission_service import (
    RolePermissionService,
)
from cms_admin.application.services.role_service import RoleService
from cms_admin.application.services.user_role_service import UserRoleService
from cms_admin.core.constants import MANAGE_USERS
from cms_admin.core.limiter import limit_writes
from cms_admin.schemas.authorization import UserPermissionsResponse
from cms_admin.schemas.user_role import (
    AssignmentChangedResponse,
    PrimaryRoleResponse,
    UserRoleAssign,
    UserRoleResponse,
)
from cms_admin.shared.context import CurrentUserContext

router = APIRouter()

CanManage = Annotated[CurrentUserContext, Depends(require_permission(MANAGE_USERS))]


@router.get("/{user_id}/roles", response_model=list[UserRoleResponse])
async def list_user_roles(
    user_id: str,
    _: CanManage,
    module: str | None = None,
    svc: UserRoleService = Depends(get_user_role_service),
):
    return [
        UserRoleResponse.model_validate(ur)
        for ur in await svc.get_roles_for_user(user_id, module)
    ]


@router.post(
    "/{user_id}/roles", response_model=AssignmentChangedResponse, status_code=201
)
@limit_writes
async def assign_role_to_user(
    request: Request,
    user_id: str,
    body: UserRoleAssign,
    _: CanManage,
    svc: UserRoleService = Depends(get_user_role_service_for_write),
):
    """Assign a role. Assigning twice succeeds with changed=false."""
    changed = await svc.assign_role(user_id, body.role_id, body.module)
    return AssignmentChangedResponse(changed=changed)


@router.delete("/{user_id}/roles/{role_id}", response_model=AssignmentChangedResponse)
@limit_writes
async def remove_role_from_user(
    request: Request,
    user_id: str,
    role_id: str,
    _: CanManage,
    module: str | None = None,
    svc: UserRoleService = Depends(get_user_role_service_for_write),
):
    changed = await svc.unassign_role(user_id, role_id, module)
    return AssignmentChangedResponse(changed=changed)


@router.get("/{user_id}/primary-role", response_model=PrimaryRoleResponse)
async def get_primary_role(
    user_id: str,
    _: CanManage,
    svc: RoleService = Depends(get_role_service),
):
    """Role of the user's earliest assignment; role_id is null when the user has none."""
    role_id = await svc.get_primary_role_id_for_user(user_id)
    return PrimaryRoleResponse(user_id=user_id, role_id=role_id)


@router.get("/{user_id}/permissions", response_model=UserPermissionsResponse)
async def get_user_permissions(
    user_id: str,
    _: CanManage,
    svc: RolePermissionService = Depends(get_role_permission_service),
):
    """Permission names granted through the user's roles (what a token's claims should hold)."""
    names = await svc.get_permission_names_for_user(user_id)
    return UserPermissionsResponse(user_id=user_id, permissions=names)
