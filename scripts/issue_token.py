"""Issue a bearer token whose permission claims come from the user's roles in the database.

Usage:
    python -m scripts.issue_token <user_id> [expire_minutes]
For local development and smoke tests; sign-in itself lives outside this service.
"""

import asyncio
import sys
from datetime import timedelta

from cms_admin.application.services import RolePermissionService
from cms_admin.infrastructure.persistence import database
from cms_admin.infrastructure.persistence.repositories import (
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
    UserRoleRepository,
)
from cms_admin.infrastructure.security.jwt import create_access_token


async def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: python -m scripts.issue_token <user_id> [expire_minutes]", file=sys.stderr)
        sys.exit(1)
    user_id = sys.argv[1]
    expires = timedelta(minutes=int(sys.argv[2])) if len(sys.argv) > 2 else None

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)
    try:
        async with database.AsyncSessionLocal() as session:
            svc = RolePermissionService(
                RolePermissionRepository(session),
                RoleRepository(session),
                PermissionRepository(session),
                UserRoleRepository(session),
            )
            permissions = await svc.get_permission_names_for_user(user_id)
    finally:
        await database.dispose_engine()
    print(create_access_token(user_id, permissions, expires_delta=expires))


if __name__ == "__main__":
    asyncio.run(main())
