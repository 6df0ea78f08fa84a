"""Application lifespan: startup and shutdown.

Wiring only: module registry on startup, DB engine dispose on shutdown.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from cms_admin.core.config import get_settings
from cms_admin.core.modules import ModuleRegistry
from cms_admin.infrastructure.persistence import database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Populate app.state.modules from ENABLED_MODULES, yield, then dispose the engine."""
    settings = get_settings()
    if getattr(app.state, "modules", None) is None:
        app.state.modules = ModuleRegistry.from_names(settings.module_names)
    logger.info(
        "%s %s started (%d modules registered)",
        settings.app_name,
        settings.app_version,
        len(app.state.modules),
    )

    yield

    if database.engine is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
