"""Roles API: paged list, active list, recycle bin, CRUD and role-permission grants."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from cms_admin.api.v1.dependencies import (
    get_role_permission_service,
    get_role_permission_service_for_write,
    get_role_service,
    get_role_service_for_write,
    page_size,
    require_permission,
)
from cms_admin.application.dtos.role import CreateRoleRequest, UpdateRoleRequest
from cms_admin.application.services.role_permission_service import (
    RolePermissionService,
)
from cms_admin.application.services.role_service import RoleService
from cms_admin.core.constants import MANAGE_ROLES
from cms_admin.core.limiter import limit_writes
from cms_admin.domain.exceptions import ResourceNotFoundException
from cms_admin.schemas.role import (
    RoleCreateRequest,
    RoleListResponse,
    RolePermissionAssign,
    RolePermissionResponse,
    RoleResponse,
    RoleUpdateRequest,
)
from cms_admin.schemas.user_role import AssignmentChangedResponse
from cms_admin.shared.context import CurrentUserContext

router = APIRouter()

CanManage = Annotated[CurrentUserContext, Depends(require_permission(MANAGE_ROLES))]


@router.get("", response_model=RoleListResponse)
async def list_roles(
    _: CanManage,
    search: str | None = None,
    sort_column: str | None = None,
    sort_direction: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    take: Annotated[int | None, Query(ge=0)] = None,
    svc: RoleService = Depends(get_role_service),
):
    """Non-deleted roles matching search, sorted by name|displayname|createdat."""
    result = await svc.get_paged_list(
        search, sort_column, sort_direction, skip, page_size(take)
    )
    return RoleListResponse(
        total_count=result.total_count,
        items=[RoleResponse.model_validate(r) for r in result.roles],
    )


@router.get("/active", response_model=list[RoleResponse])
async def list_active_roles(
    _: CanManage,
    svc: RoleService = Depends(get_role_service),
):
    """Active roles for dropdowns."""
    return [RoleResponse.model_validate(r) for r in await svc.get_all_roles()]


@router.get("/deleted", response_model=list[RoleResponse])
async def list_deleted_roles(
    _: CanManage,
    svc: RoleService = Depends(get_role_service),
):
    return [RoleResponse.model_validate(r) for r in await svc.get_deleted()]


@router.get("/by-name/{name}", response_model=RoleResponse)
async def get_role_by_name(
    name: str,
    _: CanManage,
    svc: RoleService = Depends(get_role_service),
):
    role = await svc.get_by_name(name)
    if not role:
        raise ResourceNotFoundException("Role", name)
    return RoleResponse.model_validate(role)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: str,
    _: CanManage,
    svc: RoleService = Depends(get_role_service),
):
    role = await svc.get_by_id(role_id)
    if not role:
        raise ResourceNotFoundException("Role", role_id)
    return RoleResponse.model_validate(role)


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    context: CanManage,
    svc: RoleService = Depends(get_role_service_for_write),
):
    created = await svc.create(
        CreateRoleRequest(
            name=body.name,
            display_name=body.display_name,
            description=body.description,
            module=body.module,
            display_order=body.display_order,
        ),
        performed_by=context.require_user_id(),
    )
    return RoleResponse.model_validate(created)


@router.put("/{role_id}", response_model=RoleResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdateRequest,
    context: CanManage,
    svc: RoleService = Depends(get_role_service_for_write),
):
    """Update display info, module, order and active flag (name is immutable)."""
    updated = await svc.update(
        UpdateRoleRequest(
            id=role_id,
            display_name=body.display_name,
            description=body.description,
            module=body.module,
            display_order=body.display_order,
            is_active=body.is_active,
        ),
        performed_by=context.require_user_id(),
    )
    return RoleResponse.model_validate(updated)


@router.delete("/{role_id}", status_code=204)
@limit_writes
async def soft_delete_role(
    request: Request,
    role_id: str,
    context: CanManage,
    svc: RoleService = Depends(get_role_service_for_write),
):
    """Move to recycle bin."""
    await svc.soft_delete(role_id, context.require_user_id())


@router.post("/{role_id}/restore", status_code=204)
@limit_writes
async def restore_role(
    request: Request,
    role_id: str,
    context: CanManage,
    svc: RoleService = Depends(get_role_service_for_write),
):
    await svc.restore(role_id, context.require_user_id())


@router.delete("/{role_id}/permanent", status_code=204)
@limit_writes
async def delete_role(
    request: Request,
    role_id: str,
    _: CanManage,
    svc: RoleService = Depends(get_role_service_for_write),
):
    """Physically delete; user and permission assignments cascade. 404 if absent."""
    await svc.delete(role_id)


@router.get("/{role_id}/permissions", response_model=list[RolePermissionResponse])
async def list_role_permissions(
    role_id: str,
    _: CanManage,
    module: str | None = None,
    svc: RolePermissionService = Depends(get_role_permission_service),
):
    return [
        RolePermissionResponse.model_validate(rp)
        for rp in await svc.get_permissions_for_role(role_id, module)
    ]


@router.post(
    "/{role_id}/permissions", response_model=AssignmentChangedResponse, status_code=201
)
@limit_writes
async def assign_permission_to_role(
    request: Request,
    role_id: str,
    body: RolePermissionAssign,
    context: CanManage,
    svc: RolePermissionService = Depends(get_role_permission_service_for_write),
):
    """Grant a permission. Granting twice succeeds with changed=false."""
    changed = await svc.assign_permission(
        role_id, body.permission_id, context.require_user_id(), body.module
    )
    return AssignmentChangedResponse(changed=changed)


@router.delete(
    "/{role_id}/permissions/{permission_id}", response_model=AssignmentChangedResponse
)
@limit_writes
async def remove_permission_from_role(
    request: Request,
    role_id: str,
    permission_id: str,
    _: CanManage,
    module: str | None = None,
    svc: RolePermissionService = Depends(get_role_permission_service_for_write),
):
    """Revoke a grant. System grants return 400."""
    changed = await svc.unassign_permission(role_id, permission_id, module)
    return AssignmentChangedResponse(changed=changed)
