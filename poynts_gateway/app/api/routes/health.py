"""Health check endpoints.

- /health: liveness, always ok
- /healthz: organization database and backend configuration, optionally
  backend reachability
"""

from typing import Any

import httpx
from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text

from poynts_gateway.app.config import Settings, get_settings
from poynts_gateway.app.db.engine import get_async_engine

router = APIRouter()


async def check_db(settings: Settings) -> tuple[bool, str]:
    """Check organization database connectivity.

    Returns:
        (is_ok, status_message)
    """
    if not settings.database_url:
        return (False, "not_configured")

    try:
        async with get_async_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return (True, "ok")
    except Exception as e:
        return (False, f"error: {type(e).__name__}")


async def check_backend(settings: Settings) -> tuple[bool, str]:
    """Check backend key configuration and, when enabled, reachability.

    Returns:
        (is_ok, status_message)
    """
    if not settings.backend_api_key:
        return (False, "not_configured")

    if not settings.backend_healthcheck_enabled:
        return (True, "configured")

    try:
        async with httpx.AsyncClient(timeout=settings.backend_timeout_seconds) as client:
            await client.get(settings.backend_base_url)
        return (True, "ok")
    except httpx.HTTPError as e:
        return (False, f"error: {type(e).__name__}")


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz", response_model=None)
async def healthz() -> dict[str, Any] | Response:
    """Health check endpoint.

    Returns:
        200 with component status if core systems ok
        503 if any component fails
    """
    settings = get_settings()

    db_ok, db_status = await check_db(settings)
    backend_ok, backend_status = await check_backend(settings)

    response_body = {
        "status": "ok" if db_ok and backend_ok else "degraded",
        "components": {
            "db": db_status,
            "backend": backend_status,
        },
    }

    if not (db_ok and backend_ok):
        return JSONResponse(response_body, status_code=503)

    return response_body
