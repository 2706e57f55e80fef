"""Unit tests for caller authentication and authorization dependencies."""

import pytest
from starlette.requests import Request

from poynts_gateway.app.api.auth import (
    GatewayHeaderIdentityProvider,
    require_admin_access,
    require_caller,
    require_domain_permission,
)
from poynts_gateway.app.config import Settings
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.errors import ForbiddenError, UnauthorizedError
from poynts_gateway.app.permissions import ADMIN_ACCESS_PERMISSION, Domain


def make_request(method: str = "GET", headers: dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": "/api/v1/campaigns",
        "query_string": b"",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


@pytest.mark.asyncio
async def test_header_provider_builds_identity() -> None:
    request = make_request(
        headers={
            "X-Auth-User-Id": "user_1",
            "X-Auth-Org-Id": "org_acme",
            "X-Auth-Permissions": "org:campaigns:view, org:campaigns:manage,,",
        }
    )

    identity = await GatewayHeaderIdentityProvider().authenticate(request)

    assert identity == CallerIdentity(
        user_id="user_1",
        org_id="org_acme",
        permissions=frozenset({"org:campaigns:view", "org:campaigns:manage"}),
    )


@pytest.mark.asyncio
async def test_header_provider_without_user_is_anonymous() -> None:
    request = make_request(headers={"X-Auth-Org-Id": "org_acme"})

    assert await GatewayHeaderIdentityProvider().authenticate(request) is None


@pytest.mark.asyncio
async def test_header_provider_blank_org_is_none() -> None:
    request = make_request(headers={"X-Auth-User-Id": "user_1", "X-Auth-Org-Id": "  "})

    identity = await GatewayHeaderIdentityProvider().authenticate(request)

    assert identity is not None
    assert identity.org_id is None
    assert identity.permissions == frozenset()


@pytest.mark.asyncio
async def test_require_caller_rejects_anonymous() -> None:
    with pytest.raises(UnauthorizedError) as exc_info:
        await require_caller(None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Unauthorized"


@pytest.mark.asyncio
async def test_domain_permission_uses_method_operation() -> None:
    dependency = require_domain_permission(Domain.CAMPAIGNS)
    caller = CallerIdentity(user_id="u1", org_id="o1", permissions=frozenset({"org:campaigns:view"}))
    settings = Settings(backend_api_key="k")

    assert await dependency(make_request("GET"), caller, settings) is caller

    with pytest.raises(ForbiddenError) as exc_info:
        await dependency(make_request("DELETE"), caller, settings)

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "You don't have permission to manage campaigns"


@pytest.mark.asyncio
async def test_domain_permission_can_be_disabled() -> None:
    dependency = require_domain_permission(Domain.CATALOGS)
    caller = CallerIdentity(user_id="u1", org_id="o1")

    result = await dependency(
        make_request("POST"), caller, Settings(backend_api_key="k", enforce_permissions=False)
    )

    assert result is caller


@pytest.mark.asyncio
async def test_admin_access() -> None:
    settings = Settings(backend_api_key="k")
    admin = CallerIdentity(user_id="u1", permissions=frozenset({ADMIN_ACCESS_PERMISSION}))
    member = CallerIdentity(user_id="u2", permissions=frozenset({"org:members:view"}))

    assert await require_admin_access(admin, settings) is admin

    with pytest.raises(ForbiddenError, match="requires admin access"):
        await require_admin_access(member, settings)

    relaxed = Settings(backend_api_key="k", enforce_permissions=False)
    assert await require_admin_access(member, relaxed) is member
