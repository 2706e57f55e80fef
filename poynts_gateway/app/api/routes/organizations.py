"""Organization routes.

GET /organizations - List all organizations (admin, cross-organization)
GET /organization  - The caller's own organization record (local lookup)
"""

from typing import Any

from fastapi import APIRouter, Request, Response

from poynts_gateway.app.api.auth import AdminCaller, Caller
from poynts_gateway.app.api.deps import Proxy, Resolver
from poynts_gateway.app.errors import error_response
from poynts_gateway.app.models.proxy import ADMIN_PROXY_CONFIG, ProxyRequest
from poynts_gateway.app.proxy.client import extract_query_params
from poynts_gateway.app.proxy.resolver import CredentialFailure

router = APIRouter(tags=["organizations"])


@router.get("/organizations")
async def list_organizations(request: Request, caller: AdminCaller, proxy: Proxy) -> Response:
    """List all organizations without organization filtering."""
    return await proxy.forward(
        ProxyRequest(
            method="GET", path="/v1/organizations", query_params=extract_query_params(request)
        ),
        caller,
        ADMIN_PROXY_CONFIG,
    )


@router.get("/organization", response_model=None)
async def get_current_organization(caller: Caller, resolver: Resolver) -> dict[str, Any] | Response:
    """Return the internal organization mapped to the caller's organization."""
    organization = await resolver.get_organization(caller)
    if isinstance(organization, CredentialFailure):
        return error_response(organization.message, organization.status_code)

    return {"data": {"id": organization.id, "name": organization.name, "status": organization.status}}
