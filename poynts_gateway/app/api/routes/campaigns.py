"""Campaign proxy routes.

GET    /campaigns                                   - List campaigns
POST   /campaigns                                   - Create a campaign
GET    /campaigns/{campaign_id}                     - Get a campaign with its steps
PATCH  /campaigns/{campaign_id}                     - Update a campaign
DELETE /campaigns/{campaign_id}                     - Delete a campaign
GET    /campaigns/{campaign_id}/steps               - List campaign steps
POST   /campaigns/{campaign_id}/steps               - Create a campaign step
POST   /campaigns/{campaign_id}/members/{member_id}/enroll - Enroll a member
DELETE /campaigns/{campaign_id}/members/{member_id}/enroll - Unenroll a member
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from poynts_gateway.app.api.auth import require_domain_permission
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.models.proxy import ProxyRequest
from poynts_gateway.app.permissions import Domain
from poynts_gateway.app.proxy.client import extract_query_params, path_segment, require_body

router = APIRouter(prefix="/campaigns", tags=["campaigns"])

CampaignsCaller = Annotated[CallerIdentity, Depends(require_domain_permission(Domain.CAMPAIGNS))]


@router.get("")
async def list_campaigns(request: Request, caller: CampaignsCaller, proxy: Proxy) -> Response:
    """List campaigns for the caller's organization."""
    return await proxy.forward(
        ProxyRequest(method="GET", path="/campaigns", query_params=extract_query_params(request)),
        caller,
    )


@router.post("")
async def create_campaign(request: Request, caller: CampaignsCaller, proxy: Proxy) -> Response:
    """Create a campaign in the caller's organization."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path="/campaigns", body=body),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{campaign_id}")
async def get_campaign(campaign_id: str, caller: CampaignsCaller, proxy: Proxy) -> Response:
    """Get a single campaign with its steps."""
    return await proxy.forward(
        ProxyRequest(method="GET", path=f"/v1/campaigns/{path_segment(campaign_id)}"), caller
    )


@router.patch("/{campaign_id}")
async def update_campaign(
    campaign_id: str, request: Request, caller: CampaignsCaller, proxy: Proxy
) -> Response:
    """Update a campaign."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="PATCH", path=f"/v1/campaigns/{path_segment(campaign_id)}", body=body),
        caller,
    )


@router.delete("/{campaign_id}")
async def delete_campaign(campaign_id: str, caller: CampaignsCaller, proxy: Proxy) -> Response:
    """Delete a campaign."""
    return await proxy.forward(
        ProxyRequest(method="DELETE", path=f"/v1/campaigns/{path_segment(campaign_id)}"),
        caller,
        success_status=status.HTTP_204_NO_CONTENT,
    )


@router.get("/{campaign_id}/steps")
async def list_campaign_steps(
    campaign_id: str, request: Request, caller: CampaignsCaller, proxy: Proxy
) -> Response:
    """List the steps of a campaign."""
    return await proxy.forward(
        ProxyRequest(
            method="GET",
            path=f"/v1/campaigns/{path_segment(campaign_id)}/steps",
            query_params=extract_query_params(request),
        ),
        caller,
    )


@router.post("/{campaign_id}/steps")
async def create_campaign_step(
    campaign_id: str, request: Request, caller: CampaignsCaller, proxy: Proxy
) -> Response:
    """Add a step to a campaign."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(
            method="POST", path=f"/v1/campaigns/{path_segment(campaign_id)}/steps", body=body
        ),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


def _enrollment_path(campaign_id: str, member_id: str) -> str:
    return f"/v1/campaigns/{path_segment(campaign_id)}/members/{path_segment(member_id)}/enroll"


@router.post("/{campaign_id}/members/{member_id}/enroll")
async def enroll_member(
    campaign_id: str, member_id: str, caller: CampaignsCaller, proxy: Proxy
) -> Response:
    """Enroll a member in a campaign."""
    return await proxy.forward(
        ProxyRequest(method="POST", path=_enrollment_path(campaign_id, member_id)),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.delete("/{campaign_id}/members/{member_id}/enroll")
async def unenroll_member(
    campaign_id: str, member_id: str, caller: CampaignsCaller, proxy: Proxy
) -> Response:
    """Remove a member from a campaign."""
    return await proxy.forward(
        ProxyRequest(method="DELETE", path=_enrollment_path(campaign_id, member_id)),
        caller,
        success_status=status.HTTP_204_NO_CONTENT,
    )
