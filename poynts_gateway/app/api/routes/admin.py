"""Admin proxy routes (cross-organization, no organization_id filter).

GET  /reward-sources                                  - List reward sources
GET  /reward-sources/{source_id}/catalog              - Fetch a source's catalog
POST /reward-sources/{source_id}/catalog/sync         - Sync catalog items from a source
GET  /rewards                                         - List all global rewards
GET  /source-items                                    - List all source items
POST /internal/activity                               - Record an admin activity entry
POST /internal/emails/send-gift-card                  - Email a gift card
"""

from typing import Any

from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel, ValidationError

from poynts_gateway.app.api.auth import AdminCaller
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.errors import BadRequestError
from poynts_gateway.app.models.proxy import ADMIN_PROXY_CONFIG, ProxyRequest
from poynts_gateway.app.models.requests import CatalogSyncRequest, SendGiftCardRequest
from poynts_gateway.app.proxy.client import extract_query_params, path_segment, require_body

router = APIRouter(tags=["admin"])


def _validate(model: type[BaseModel], body: Any) -> ValidationError | None:
    try:
        model.model_validate(body)
    except ValidationError as e:
        return e
    return None


async def _admin_get(path: str, request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="GET", path=path, query_params=extract_query_params(request)),
        caller,
        ADMIN_PROXY_CONFIG,
    )


@router.get("/reward-sources")
async def list_reward_sources(request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    return await _admin_get("/v1/internal/reward-sources", request, caller, proxy)


@router.get("/reward-sources/{source_id}/catalog")
async def get_reward_source_catalog(
    source_id: str, request: Request, caller: AdminCaller, proxy: Proxy
) -> Response:
    """Fetch catalog items from a reward source (limit, offset, include_raw pass through)."""
    return await _admin_get(
        f"/v1/internal/reward-sources/{path_segment(source_id)}/catalog", request, caller, proxy
    )


@router.post("/reward-sources/{source_id}/catalog/sync")
async def sync_reward_source_catalog(
    source_id: str, request: Request, caller: AdminCaller, proxy: Proxy
) -> Response:
    """Sync selected source items into the global rewards table."""
    body = await require_body(request)

    if _validate(CatalogSyncRequest, body) is not None:
        raise BadRequestError("sourceIdentifiers is required and must be an array")

    return await proxy.forward(
        ProxyRequest(
            method="POST",
            path=f"/v1/internal/reward-sources/{path_segment(source_id)}/catalog/sync",
            body=body,
        ),
        caller,
        ADMIN_PROXY_CONFIG,
    )


@router.get("/rewards")
async def list_rewards(request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    """List global rewards (status, type, brand_fk, source_fk, search, limit, offset)."""
    return await _admin_get("/v1/internal/rewards", request, caller, proxy)


@router.get("/source-items")
async def list_source_items(request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    return await _admin_get("/v1/internal/source-items", request, caller, proxy)


@router.post("/internal/activity")
async def record_activity(request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path="/internal/activity", body=body),
        caller,
        ADMIN_PROXY_CONFIG,
        success_status=status.HTTP_201_CREATED,
    )


@router.post("/internal/emails/send-gift-card")
async def send_gift_card_email(request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    """Send a gift card email through the backend."""
    body = await require_body(request)

    # A non-object body is missing every field
    error = _validate(SendGiftCardRequest, body if isinstance(body, dict) else {})
    if error is not None:
        field = ".".join(str(part) for part in error.errors()[0]["loc"])
        raise BadRequestError(f"Missing required field: {field}")

    return await proxy.forward(
        ProxyRequest(method="POST", path="/v1/internal/emails/send-gift-card", body=body),
        caller,
        ADMIN_PROXY_CONFIG,
    )
