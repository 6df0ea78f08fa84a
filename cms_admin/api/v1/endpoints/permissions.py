"""Permissions API: paged list, recycle bin, CRUD, soft delete, restore and hard delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from cms_admin.api.v1.dependencies import (
    get_permission_service,
    get_permission_service_for_write,
    page_size,
    require_permission,
)
from cms_admin.application.dtos.permission import (
    CreatePermissionRequest,
    UpdatePermissionRequest,
)
from cms_admin.application.services.permission_service import PermissionService
from cms_admin.core.constants import MANAGE_PERMISSIONS
from cms_admin.core.limiter import limit_writes
from cms_admin.domain.exceptions import ResourceNotFoundException
from cms_admin.schemas.permission import (
    PermissionCreateRequest,
    PermissionListResponse,
    PermissionResponse,
    PermissionUpdateRequest,
)
from cms_admin.shared.context import CurrentUserContext

router = APIRouter()

CanManage = Annotated[CurrentUserContext, Depends(require_permission(MANAGE_PERMISSIONS))]


@router.get("", response_model=PermissionListResponse)
async def list_permissions(
    _: CanManage,
    search: str | None = None,
    sort_column: str | None = None,
    sort_direction: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    take: Annotated[int | None, Query(ge=0)] = None,
    svc: PermissionService = Depends(get_permission_service),
):
    """Non-deleted permissions matching search, sorted by name|displayname|issystem."""
    result = await svc.get_paged_list(
        search, sort_column, sort_direction, skip, page_size(take)
    )
    return PermissionListResponse(
        total_count=result.total_count,
        items=[PermissionResponse.model_validate(p) for p in result.permissions],
    )


@router.get("/all", response_model=list[PermissionResponse])
async def list_all_permissions(
    _: CanManage,
    svc: PermissionService = Depends(get_permission_service),
):
    """All non-deleted permissions (unpaged, e.g. for role editors)."""
    return [PermissionResponse.model_validate(p) for p in await svc.get_all()]


@router.get("/deleted", response_model=list[PermissionResponse])
async def list_deleted_permissions(
    _: CanManage,
    svc: PermissionService = Depends(get_permission_service),
):
    """Recycle bin."""
    return [PermissionResponse.model_validate(p) for p in await svc.get_deleted()]


@router.get("/by-name/{name}", response_model=PermissionResponse)
async def get_permission_by_name(
    name: str,
    _: CanManage,
    svc: PermissionService = Depends(get_permission_service),
):
    permission = await svc.get_by_name(name)
    if not permission:
        raise ResourceNotFoundException("Permission", name)
    return PermissionResponse.model_validate(permission)


@router.get("/{permission_id}", response_model=PermissionResponse)
async def get_permission(
    permission_id: str,
    _: CanManage,
    svc: PermissionService = Depends(get_permission_service),
):
    permission = await svc.get_by_id(permission_id)
    if not permission:
        raise ResourceNotFoundException("Permission", permission_id)
    return PermissionResponse.model_validate(permission)


@router.post("", response_model=PermissionResponse, status_code=201)
@limit_writes
async def create_permission(
    request: Request,
    body: PermissionCreateRequest,
    context: CanManage,
    svc: PermissionService = Depends(get_permission_service_for_write),
):
    created = await svc.create(
        CreatePermissionRequest(
            name=body.name,
            display_name=body.display_name,
            module=body.module,
            description=body.description,
        ),
        created_by=context.require_user_id(),
    )
    return PermissionResponse.model_validate(created)


@router.put("/{permission_id}", response_model=PermissionResponse)
@limit_writes
async def update_permission(
    request: Request,
    permission_id: str,
    body: PermissionUpdateRequest,
    context: CanManage,
    svc: PermissionService = Depends(get_permission_service_for_write),
):
    """Update a permission. Renaming a system permission returns 400."""
    updated = await svc.update(
        UpdatePermissionRequest(
            id=permission_id,
            name=body.name,
            display_name=body.display_name,
            module=body.module,
            description=body.description,
        ),
        modified_by=context.require_user_id(),
    )
    return PermissionResponse.model_validate(updated)


@router.delete("/{permission_id}", status_code=204)
@limit_writes
async def soft_delete_permission(
    request: Request,
    permission_id: str,
    context: CanManage,
    svc: PermissionService = Depends(get_permission_service_for_write),
):
    """Move to recycle bin. System permissions return 400."""
    await svc.soft_delete(permission_id, context.require_user_id())


@router.post("/{permission_id}/restore", status_code=204)
@limit_writes
async def restore_permission(
    request: Request,
    permission_id: str,
    context: CanManage,
    svc: PermissionService = Depends(get_permission_service_for_write),
):
    await svc.restore(permission_id, context.require_user_id())


@router.delete("/{permission_id}/permanent", status_code=204)
@limit_writes
async def hard_delete_permission(
    request: Request,
    permission_id: str,
    _: CanManage,
    svc: PermissionService = Depends(get_permission_service_for_write),
):
    """Physically delete (role grants cascade). Unknown ids succeed silently."""
    await svc.hard_delete(permission_id)
