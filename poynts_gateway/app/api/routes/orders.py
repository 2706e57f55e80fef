"""Order proxy routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from poynts_gateway.app.api.auth import require_domain_permission
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.models.proxy import ProxyRequest
from poynts_gateway.app.permissions import Domain
from poynts_gateway.app.proxy.client import extract_query_params, path_segment, require_body

router = APIRouter(prefix="/orders", tags=["orders"])

OrdersCaller = Annotated[CallerIdentity, Depends(require_domain_permission(Domain.ORDERS))]


@router.get("")
async def list_orders(request: Request, caller: OrdersCaller, proxy: Proxy) -> Response:
    """List orders for the caller's organization."""
    return await proxy.forward(
        ProxyRequest(method="GET", path="/orders", query_params=extract_query_params(request)),
        caller,
    )


@router.post("")
async def create_order(request: Request, caller: OrdersCaller, proxy: Proxy) -> Response:
    """Place an order."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path="/orders", body=body),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{order_id}")
async def get_order(order_id: str, caller: OrdersCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="GET", path=f"/v1/orders/{path_segment(order_id)}"), caller
    )


@router.patch("/{order_id}")
async def update_order(
    order_id: str, request: Request, caller: OrdersCaller, proxy: Proxy
) -> Response:
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="PATCH", path=f"/v1/orders/{path_segment(order_id)}", body=body),
        caller,
    )
