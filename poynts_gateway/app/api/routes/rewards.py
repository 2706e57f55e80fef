"""Tenant reward proxy routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from poynts_gateway.app.api.auth import require_domain_permission
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.models.proxy import ProxyRequest
from poynts_gateway.app.permissions import Domain
from poynts_gateway.app.proxy.client import path_segment

router = APIRouter(prefix="/rewards", tags=["rewards"])

RewardsCaller = Annotated[CallerIdentity, Depends(require_domain_permission(Domain.REWARDS))]


@router.get("/{reward_id}")
async def get_reward(reward_id: str, caller: RewardsCaller, proxy: Proxy) -> Response:
    """Get a single reward visible to the caller's organization."""
    return await proxy.forward(
        ProxyRequest(method="GET", path=f"/rewards/{path_segment(reward_id)}"), caller
    )
