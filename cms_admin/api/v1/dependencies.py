"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, services and the caller context.
Routes depend only on these dependencies, never on repositories directly.
Read endpoints get services on a plain session (get_db); write endpoints on a
transactional one (get_db_transactional) that commits when the handler returns.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cms_admin.application.services import (
    AuthorizationService,
    PermissionService,
    RolePermissionService,
    RoleService,
    UserRoleService,
)
from cms_admin.core.config import get_settings
from cms_admin.core.modules import ModuleRegistry
from cms_admin.domain.exceptions import AuthenticationException
from cms_admin.infrastructure.persistence.database import get_db, get_db_transactional
from cms_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)
from cms_admin.infrastructure.security.jwt import context_from_token
from cms_admin.shared.context import CurrentUserContext

_http_bearer = HTTPBearer(auto_error=False)


def get_module_registry(request: Request) -> ModuleRegistry:
    """Registry built at startup (app.state.modules); empty when none configured."""
    registry = getattr(request.app.state, "modules", None)
    return registry if registry is not None else ModuleRegistry()


# ---- Caller context ----


async def get_current_user_context(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> CurrentUserContext:
    """Caller context from the bearer token; anonymous without one, 401 for a bad one."""
    ip_address = request.client.host if request.client else None
    if not credentials:
        return CurrentUserContext.anonymous(ip_address=ip_address)
    try:
        return context_from_token(credentials.credentials, ip_address=ip_address)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None


def _authorization_service(db: AsyncSession) -> AuthorizationService:
    return AuthorizationService(
        UserRoleRepository(db),
        RolePermissionRepository(db),
        full_admin_permission=get_settings().full_admin_access_permission,
    )


async def get_authorization_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizationService:
    return _authorization_service(db)


def require_permission(permission_name: str):
    """Dependency factory: require an authenticated caller whose claims grant permission_name."""

    async def _require(
        context: Annotated[CurrentUserContext, Depends(get_current_user_context)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> CurrentUserContext:
        auth_svc.require_permission(context, permission_name)
        return context

    return _require


# ---- Services ----


def _role_service(db: AsyncSession, modules: ModuleRegistry) -> RoleService:
    return RoleService(
        RoleRepository(db),
        UserRoleRepository(db),
        modules=modules,
        protect_system_roles=get_settings().protect_system_roles,
    )


def _role_permission_service(
    db: AsyncSession, modules: ModuleRegistry
) -> RolePermissionService:
    return RolePermissionService(
        RolePermissionRepository(db),
        RoleRepository(db),
        PermissionRepository(db),
        UserRoleRepository(db),
        modules=modules,
    )


def _user_role_service(db: AsyncSession, modules: ModuleRegistry) -> UserRoleService:
    return UserRoleService(UserRoleRepository(db), RoleRepository(db), modules=modules)


async def get_permission_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionService:
    return PermissionService(PermissionRepository(db))


async def get_permission_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PermissionService:
    return PermissionService(PermissionRepository(db))


async def get_role_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    modules: Annotated[ModuleRegistry, Depends(get_module_registry)],
) -> RoleService:
    return _role_service(db, modules)


async def get_role_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    modules: Annotated[ModuleRegistry, Depends(get_module_registry)],
) -> RoleService:
    return _role_service(db, modules)


async def get_role_permission_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    modules: Annotated[ModuleRegistry, Depends(get_module_registry)],
) -> RolePermissionService:
    return _role_permission_service(db, modules)


async def get_role_permission_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    modules: Annotated[ModuleRegistry, Depends(get_module_registry)],
) -> RolePermissionService:
    return _role_permission_service(db, modules)


async def get_user_role_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    modules: Annotated[ModuleRegistry, Depends(get_module_registry)],
) -> UserRoleService:
    return _user_role_service(db, modules)


async def get_user_role_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    modules: Annotated[ModuleRegistry, Depends(get_module_registry)],
) -> UserRoleService:
    return _user_role_service(db, modules)


def page_size(take: int | None) -> int:
    """DEFAULT_PAGE_SIZE when take is omitted; otherwise take clamped to MAX_PAGE_SIZE."""
    settings = get_settings()
    if take is None:
        return settings.default_page_size
    return min(take, settings.max_page_size)
