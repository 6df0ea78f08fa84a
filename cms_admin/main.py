"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See cms_admin.core.lifespan and cms_admin.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and clear the
get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from cms_admin.api.v1 import api_router
from cms_admin.core.config import get_settings
from cms_admin.core.exception_handlers import register_exception_handlers
from cms_admin.core.lifespan import create_lifespan
from cms_admin.core.limiter import limiter
from cms_admin.core.modules import ModuleRegistry
from cms_admin.middleware import CorrelationIDMiddleware, RequestIDMiddleware
from cms_admin.shared.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.state.modules = ModuleRegistry.from_names(settings.module_names)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost: request ID runs before correlation ID so it can be reused.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIDMiddleware, header_name=settings.correlation_id_header)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    return app
