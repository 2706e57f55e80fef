"""FastAPI application for the Poynts backend proxy."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI

from poynts_gateway.app.api.routes.admin import router as admin_router
from poynts_gateway.app.api.routes.campaigns import router as campaigns_router
from poynts_gateway.app.api.routes.catalogs import router as catalogs_router
from poynts_gateway.app.api.routes.health import router as health_router
from poynts_gateway.app.api.routes.members import router as members_router
from poynts_gateway.app.api.routes.metrics import router as metrics_router
from poynts_gateway.app.api.routes.orders import router as orders_router
from poynts_gateway.app.api.routes.organizations import router as organizations_router
from poynts_gateway.app.api.routes.programs import router as programs_router
from poynts_gateway.app.api.routes.rewards import router as rewards_router
from poynts_gateway.app.config import Settings, get_settings
from poynts_gateway.app.db.engine import dispose_async_engine
from poynts_gateway.app.errors import register_exception_handlers
from poynts_gateway.app.proxy.resolver import require_backend_api_key
from poynts_gateway.app.utils.logging import configure_logging

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Fail fast on missing configuration and own the shared backend client."""
    settings: Settings = app.state.settings
    require_backend_api_key(settings)

    async with httpx.AsyncClient(timeout=settings.backend_timeout_seconds) as client:
        app.state.http_client = client
        yield
        app.state.http_client = None

    await dispose_async_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Settings to use; defaults to the cached environment settings
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Poynts Gateway", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.http_client = None

    register_exception_handlers(app)

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(campaigns_router)
    api.include_router(catalogs_router)
    api.include_router(members_router)
    api.include_router(orders_router)
    api.include_router(programs_router)
    api.include_router(rewards_router)
    api.include_router(organizations_router)
    api.include_router(admin_router)

    app.include_router(health_router, tags=["health"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(api)

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"message": "Poynts Gateway", "version": "0.1.0"}

    return app


app = create_app()
