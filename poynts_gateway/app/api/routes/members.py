"""Member proxy routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from poynts_gateway.app.api.auth import require_domain_permission
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.models.proxy import ProxyRequest
from poynts_gateway.app.permissions import Domain
from poynts_gateway.app.proxy.client import extract_query_params, path_segment, require_body

router = APIRouter(prefix="/members", tags=["members"])

MembersCaller = Annotated[CallerIdentity, Depends(require_domain_permission(Domain.MEMBERS))]


@router.get("")
async def list_members(request: Request, caller: MembersCaller, proxy: Proxy) -> Response:
    """List members of the caller's organization."""
    return await proxy.forward(
        ProxyRequest(method="GET", path="/members", query_params=extract_query_params(request)),
        caller,
    )


@router.post("")
async def create_member(request: Request, caller: MembersCaller, proxy: Proxy) -> Response:
    """Create a member."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path="/members", body=body),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{member_id}")
async def get_member(member_id: str, caller: MembersCaller, proxy: Proxy) -> Response:
    """Get a single member."""
    return await proxy.forward(
        ProxyRequest(method="GET", path=f"/members/{path_segment(member_id)}"), caller
    )


@router.patch("/{member_id}")
async def update_member(
    member_id: str, request: Request, caller: MembersCaller, proxy: Proxy
) -> Response:
    """Update a member."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="PATCH", path=f"/members/{path_segment(member_id)}", body=body),
        caller,
    )
