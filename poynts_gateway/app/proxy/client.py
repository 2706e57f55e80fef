"""Proxy client for the backend API.

Forwards requests to the backend with the resolved credential and
organization scope. Backend failures, transport failures and credential
failures all come back as a ProxyEnvelope; nothing here raises for them.
"""

import json
import logging
import time
from typing import Any
from urllib.parse import quote, urlencode

import httpx
from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

from poynts_gateway.app.config import Settings
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.errors import BadRequestError, error_response
from poynts_gateway.app.models.proxy import ProxyConfig, ProxyEnvelope, ProxyRequest
from poynts_gateway.app.proxy.resolver import ApiKeyResolver, CredentialFailure
from poynts_gateway.app.utils.logging import StructuredProxyLogger
from poynts_gateway.app.utils.metrics import PrometheusProxyMetrics

logger = logging.getLogger(__name__)

ORGANIZATION_ID_PARAM = "organization_id"
DEFAULT_PROXY_CONFIG = ProxyConfig()


def decode_error_message(data: Any, status_code: int) -> str:
    """Pick the error message from a backend error body.

    Candidates, in order:
    1. ``error.message`` (nested error object)
    2. ``message`` (top level)
    3. ``"Backend error: <status>"``
    """
    if isinstance(data, dict):
        nested = data.get("error")
        if isinstance(nested, dict) and nested.get("message"):
            return str(nested["message"])
        if data.get("message"):
            return str(data["message"])
    return f"Backend error: {status_code}"


def decode_error_name(data: Any) -> str:
    """Pick the error name from a backend error body, defaulting to BackendError."""
    if isinstance(data, dict):
        nested = data.get("error")
        if isinstance(nested, dict) and nested.get("name"):
            return str(nested["name"])
    return "BackendError"


def build_query_params(
    query_params: dict[str, str] | None,
    organization_id: str | None,
    include_org_id: bool = True,
) -> dict[str, str]:
    """Build outbound query parameters.

    A caller-supplied organization_id is always dropped; the resolved one is
    injected when organization scoping applies.
    """
    params = {k: v for k, v in (query_params or {}).items() if k != ORGANIZATION_ID_PARAM}
    if include_org_id and organization_id:
        params[ORGANIZATION_ID_PARAM] = organization_id
    return params


def build_url(base_url: str, path: str, params: dict[str, str]) -> str:
    """Join base URL, path and query string."""
    query_string = urlencode(params)
    return f"{base_url}{path}{'?' + query_string if query_string else ''}"


def path_segment(value: str) -> str:
    """Percent-encode a route parameter for use as a single backend path segment."""
    return quote(value, safe="")


def _parse_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {}


class ProxyClient:
    """Forwards requests to the backend API.

    Args:
        settings: Application settings (base URL, timeout)
        resolver: Credential resolver
        http_client: Optional shared httpx client; a short-lived client is
            created per call when omitted
    """

    def __init__(
        self,
        settings: Settings,
        resolver: ApiKeyResolver,
        http_client: httpx.AsyncClient | None = None,
        *,
        proxy_logger: StructuredProxyLogger | None = None,
        metrics: PrometheusProxyMetrics | None = None,
    ) -> None:
        self._base_url = settings.backend_base_url
        self._timeout = httpx.Timeout(settings.backend_timeout_seconds)
        self._resolver = resolver
        self._http_client = http_client
        self._log = proxy_logger or StructuredProxyLogger()
        self._metrics = metrics or PrometheusProxyMetrics()

    async def request(
        self,
        proxy_request: ProxyRequest,
        caller: CallerIdentity,
        config: ProxyConfig = DEFAULT_PROXY_CONFIG,
    ) -> ProxyEnvelope:
        """Forward a request to the backend API.

        Args:
            proxy_request: Method, path, body and query parameters
            caller: Identity of the current request
            config: Admin/organization scoping for this route

        Returns:
            ProxyEnvelope with the backend payload or a structured error
        """
        credential = await self._resolver.resolve(caller, config.is_admin_route)
        if isinstance(credential, CredentialFailure):
            self._metrics.inc_credential_failure(credential.kind.value)
            return ProxyEnvelope.failure(
                credential.status_code, credential.message, name=credential.kind.value
            )

        params = build_query_params(
            proxy_request.query_params, credential.organization_id, config.include_org_id
        )
        url = build_url(self._base_url, proxy_request.path, params)
        method = proxy_request.method

        headers = {"Authorization": f"Bearer {credential.api_key}"}
        if proxy_request.body is not None:
            headers["Content-Type"] = "application/json"

        started = time.perf_counter()
        try:
            response = await self._send(method, url, headers, proxy_request.body)
        except Exception as e:
            latency_ms = (time.perf_counter() - started) * 1000
            self._log.log_transport_failure(method, url, e, latency_ms)
            self._metrics.record_call(method, "transport_error", latency_ms)
            return ProxyEnvelope.failure(
                status.HTTP_502_BAD_GATEWAY,
                str(e) or "Backend connection failed",
                name="BadGateway",
            )

        latency_ms = (time.perf_counter() - started) * 1000

        if response.status_code == status.HTTP_204_NO_CONTENT:
            self._log.log_success(method, url, response.status_code, latency_ms)
            self._metrics.record_call(method, "success", latency_ms)
            return ProxyEnvelope.success(None)

        data = _parse_json(response)

        if not response.is_success:
            message = decode_error_message(data, response.status_code)
            self._log.log_upstream_error(method, url, response.status_code, message, latency_ms)
            self._metrics.record_call(method, "upstream_error", latency_ms)
            return ProxyEnvelope.failure(response.status_code, message, name=decode_error_name(data))

        self._log.log_success(method, url, response.status_code, latency_ms)
        self._metrics.record_call(method, "success", latency_ms)
        return ProxyEnvelope.success(data)

    async def forward(
        self,
        proxy_request: ProxyRequest,
        caller: CallerIdentity,
        config: ProxyConfig = DEFAULT_PROXY_CONFIG,
        success_status: int = status.HTTP_200_OK,
    ) -> Response:
        """Forward a request and turn the envelope into a response."""
        envelope = await self.request(proxy_request, caller, config)
        return create_proxy_response(envelope, success_status)

    async def _send(
        self, method: str, url: str, headers: dict[str, str], body: Any
    ) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.request(
                method, url, headers=headers, json=body, timeout=self._timeout
            )

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.request(method, url, headers=headers, json=body)


def create_proxy_response(envelope: ProxyEnvelope, success_status: int = status.HTTP_200_OK) -> Response:
    """Create a response from a proxy envelope.

    Args:
        envelope: Result of ProxyClient.request
        success_status: Status for successful responses

    Returns:
        ``{"error": message}`` with the error status, an empty body for
        payload-less or 204 successes, otherwise the backend payload unchanged
    """
    if envelope.error is not None:
        return error_response(
            envelope.error.message, envelope.error.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if envelope.payload is None or success_status == status.HTTP_204_NO_CONTENT:
        return Response(status_code=success_status)

    return JSONResponse(envelope.payload, status_code=success_status)


def extract_query_params(request: Request) -> dict[str, str]:
    """Inbound query parameters minus organization_id.

    Repeated keys collapse to their last value.
    """
    return {
        key: value
        for key, value in request.query_params.multi_items()
        if key != ORGANIZATION_ID_PARAM
    }


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


async def parse_body(request: Request) -> Any | None:
    """Parse the JSON body, returning None when it is absent or malformed.

    NaN and Infinity are rejected; the backend call could not encode them.
    """
    try:
        return json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError:
        return None


async def require_body(request: Request) -> Any:
    """Parse the JSON body.

    Raises:
        BadRequestError: If the body is absent, not valid JSON, or a falsy
            scalar (false, 0, "")
    """
    body = await parse_body(request)
    if body is None or (not body and not isinstance(body, (dict, list))):
        raise BadRequestError("Invalid request body")
    return body
