"""Catalog proxy routes.

GET    /catalogs                                - List catalogs
POST   /catalogs                                - Create a catalog
GET    /catalogs/{catalog_id}                   - Get a catalog
PATCH  /catalogs/{catalog_id}                   - Update a catalog
DELETE /catalogs/{catalog_id}                   - Delete a catalog
POST   /catalogs/{catalog_id}/clone             - Clone a catalog (body optional)
PUT    /catalogs/{catalog_id}/rewards/reorder   - Reorder rewards within a catalog
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from poynts_gateway.app.api.auth import require_domain_permission
from poynts_gateway.app.api.deps import Proxy
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.models.proxy import ProxyRequest
from poynts_gateway.app.permissions import Domain
from poynts_gateway.app.proxy.client import (
    extract_query_params,
    parse_body,
    path_segment,
    require_body,
)

router = APIRouter(prefix="/catalogs", tags=["catalogs"])

CatalogsCaller = Annotated[CallerIdentity, Depends(require_domain_permission(Domain.CATALOGS))]


@router.get("")
async def list_catalogs(request: Request, caller: CatalogsCaller, proxy: Proxy) -> Response:
    """List catalogs for the caller's organization."""
    return await proxy.forward(
        ProxyRequest(method="GET", path="/catalogs", query_params=extract_query_params(request)),
        caller,
    )


@router.post("")
async def create_catalog(request: Request, caller: CatalogsCaller, proxy: Proxy) -> Response:
    """Create a catalog."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path="/catalogs", body=body),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.get("/{catalog_id}")
async def get_catalog(catalog_id: str, caller: CatalogsCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="GET", path=f"/catalogs/{path_segment(catalog_id)}"), caller
    )


@router.patch("/{catalog_id}")
async def update_catalog(
    catalog_id: str, request: Request, caller: CatalogsCaller, proxy: Proxy
) -> Response:
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(method="PATCH", path=f"/catalogs/{path_segment(catalog_id)}", body=body),
        caller,
    )


@router.delete("/{catalog_id}")
async def delete_catalog(catalog_id: str, caller: CatalogsCaller, proxy: Proxy) -> Response:
    return await proxy.forward(
        ProxyRequest(method="DELETE", path=f"/catalogs/{path_segment(catalog_id)}"),
        caller,
        success_status=status.HTTP_204_NO_CONTENT,
    )


@router.post("/{catalog_id}/clone")
async def clone_catalog(
    catalog_id: str, request: Request, caller: CatalogsCaller, proxy: Proxy
) -> Response:
    """Clone a catalog. The body (e.g. a new name) is optional."""
    body = await parse_body(request)
    return await proxy.forward(
        ProxyRequest(method="POST", path=f"/catalogs/{path_segment(catalog_id)}/clone", body=body),
        caller,
        success_status=status.HTTP_201_CREATED,
    )


@router.put("/{catalog_id}/rewards/reorder")
async def reorder_catalog_rewards(
    catalog_id: str, request: Request, caller: CatalogsCaller, proxy: Proxy
) -> Response:
    """Reorder rewards within a catalog."""
    body = await require_body(request)
    return await proxy.forward(
        ProxyRequest(
            method="PUT", path=f"/catalogs/{path_segment(catalog_id)}/rewards/reorder", body=body
        ),
        caller,
    )
