"""Authorization checks: claims path for the caller, database path for any user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cms_admin.api.v1.dependencies import (
    get_authorization_service,
    get_current_user_context,
)
from cms_admin.application.services.authorization_service import AuthorizationService
from cms_admin.core.constants import MANAGE_USERS
from cms_admin.schemas.authorization import PermissionCheckResponse
from cms_admin.shared.context import CurrentUserContext

router = APIRouter()


@router.get("/check", response_model=PermissionCheckResponse)
async def check_permission(
    context: Annotated[CurrentUserContext, Depends(get_current_user_context)],
    permission: Annotated[str, Query(min_length=1)],
    user_id: str | None = None,
    module: str | None = None,
    auth_svc: AuthorizationService = Depends(get_authorization_service),
):
    """Without user_id: check the caller's token claims (anonymous is never granted).

    With user_id: check the database (roles of that user); requires manage_users.
    module narrows the database check to grants stored for that module.
    """
    if user_id is None:
        return PermissionCheckResponse(
            permission=permission,
            user_id=context.user_id,
            granted=auth_svc.has_permission(context, permission),
            source="claims",
        )
    auth_svc.require_permission(context, MANAGE_USERS)
    granted = await auth_svc.has_permission_async(user_id, permission, module)
    return PermissionCheckResponse(
        permission=permission, user_id=user_id, granted=granted, source="database"
    )
