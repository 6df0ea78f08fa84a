"""Seed system permissions, system roles and the Administrators grant into an empty database.

Usage:
    python -m scripts.seed_system_data [admin_user_id]
Optionally assigns admin_user_id to the Administrators role. Run after `alembic upgrade head`.
"""

import asyncio
import sys

from cms_admin.infrastructure.persistence import database
from cms_admin.infrastructure.services.seeder import InitialSystemDataSeeder
from cms_admin.shared.logging import setup_logging


async def main() -> None:
    setup_logging()
    admin_user_id = sys.argv[1] if len(sys.argv) > 1 else None
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                seeded = await InitialSystemDataSeeder(session).seed(admin_user_id)
    finally:
        await database.dispose_engine()
    print("Seeded system data" if seeded else "System data already present; nothing to do")


if __name__ == "__main__":
    asyncio.run(main())
