"""Models package - re-exports for convenience."""

from poynts_gateway.app.models.proxy import (
    HttpMethod,
    ProxyConfig,
    ProxyEnvelope,
    ProxyRequest,
    UpstreamError,
)
from poynts_gateway.app.models.requests import CatalogSyncRequest, SendGiftCardRequest

__all__ = [
    "CatalogSyncRequest",
    "HttpMethod",
    "ProxyConfig",
    "ProxyEnvelope",
    "ProxyRequest",
    "SendGiftCardRequest",
    "UpstreamError",
]
