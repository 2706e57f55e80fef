"""Caller authentication and authorization dependencies.

Session verification is done by the identity provider at the edge; the
verified claims reach this service as X-Auth-* headers. Every route depends
on one of the dependencies below before any body parsing or backend call.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Protocol

from fastapi import Depends, Request

from poynts_gateway.app.config import Settings, get_settings
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.errors import ForbiddenError, UnauthorizedError
from poynts_gateway.app.permissions import (
    Domain,
    check_domain_permission,
    has_admin_access,
    required_operation,
)

USER_ID_HEADER = "X-Auth-User-Id"
ORG_ID_HEADER = "X-Auth-Org-Id"
PERMISSIONS_HEADER = "X-Auth-Permissions"


class IdentityProvider(Protocol):
    """Source of caller identities."""

    async def authenticate(self, request: Request) -> CallerIdentity | None:
        """Return the caller identity, or None for anonymous requests."""
        ...


class GatewayHeaderIdentityProvider:
    """Reads identity-provider claims forwarded as request headers."""

    async def authenticate(self, request: Request) -> CallerIdentity | None:
        """Build a CallerIdentity from X-Auth-* headers."""
        user_id = (request.headers.get(USER_ID_HEADER) or "").strip()
        if not user_id:
            return None

        org_id = (request.headers.get(ORG_ID_HEADER) or "").strip() or None
        raw_permissions = request.headers.get(PERMISSIONS_HEADER) or ""
        permissions = frozenset(p.strip() for p in raw_permissions.split(",") if p.strip())

        return CallerIdentity(user_id=user_id, org_id=org_id, permissions=permissions)


_default_provider = GatewayHeaderIdentityProvider()


def get_identity_provider() -> IdentityProvider:
    """FastAPI dependency for the identity provider (override in tests)."""
    return _default_provider


async def get_caller_identity(
    request: Request,
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> CallerIdentity | None:
    """Identity of the current caller, or None when unauthenticated."""
    return await provider.authenticate(request)


async def require_caller(
    identity: Annotated[CallerIdentity | None, Depends(get_caller_identity)],
) -> CallerIdentity:
    """Require an authenticated caller.

    Raises:
        UnauthorizedError: If the request carries no identity
    """
    if identity is None:
        raise UnauthorizedError("Unauthorized")
    return identity


def require_domain_permission(domain: Domain) -> Callable[..., Awaitable[CallerIdentity]]:
    """Build a dependency that checks the domain permission for the request method.

    Args:
        domain: Resource domain of the route

    Returns:
        Dependency returning the authorized caller
    """

    async def dependency(
        request: Request,
        caller: Annotated[CallerIdentity, Depends(require_caller)],
        settings: Annotated[Settings, Depends(get_settings)],
    ) -> CallerIdentity:
        if not settings.enforce_permissions:
            return caller

        operation = required_operation(request.method)
        if not check_domain_permission(caller, domain, operation):
            raise ForbiddenError(f"You don't have permission to {operation.value} {domain.value}")
        return caller

    return dependency


async def require_admin_access(
    caller: Annotated[CallerIdentity, Depends(require_caller)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CallerIdentity:
    """Require the cross-organization admin permission.

    Raises:
        ForbiddenError: If the caller lacks admin access
    """
    if settings.enforce_permissions and not has_admin_access(caller):
        raise ForbiddenError("This endpoint requires admin access")
    return caller


Caller = Annotated[CallerIdentity, Depends(require_caller)]
AdminCaller = Annotated[CallerIdentity, Depends(require_admin_access)]
