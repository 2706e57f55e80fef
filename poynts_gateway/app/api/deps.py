"""FastAPI dependency wiring for the proxy client."""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from poynts_gateway.app.config import Settings, get_settings
from poynts_gateway.app.db.engine import open_session
from poynts_gateway.app.db.organizations import OrganizationRepository, SqlOrganizationRepository
from poynts_gateway.app.proxy.client import ProxyClient
from poynts_gateway.app.proxy.resolver import ApiKeyResolver


def get_organization_repository() -> OrganizationRepository:
    """Organization mapping; the database is only opened when a lookup happens."""
    return SqlOrganizationRepository(open_session)


def get_backend_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared httpx client created by the application lifespan, if any."""
    return getattr(request.app.state, "http_client", None)


def get_api_key_resolver(
    settings: Annotated[Settings, Depends(get_settings)],
    organizations: Annotated[OrganizationRepository, Depends(get_organization_repository)],
) -> ApiKeyResolver:
    """Credential resolver for the current request."""
    return ApiKeyResolver(settings, organizations)


def get_proxy_client(
    settings: Annotated[Settings, Depends(get_settings)],
    resolver: Annotated[ApiKeyResolver, Depends(get_api_key_resolver)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_backend_http_client)],
) -> ProxyClient:
    """Proxy client for the current request."""
    return ProxyClient(settings, resolver, http_client)


Proxy = Annotated[ProxyClient, Depends(get_proxy_client)]
Resolver = Annotated[ApiKeyResolver, Depends(get_api_key_resolver)]
