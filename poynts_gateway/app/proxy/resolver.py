"""API key resolution for backend requests.

Admin routes use the backend key with no organization scope so the backend
sees every tenant. All other routes use the same key plus the internal
organization id mapped from the caller's identity-provider organization.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import status

from poynts_gateway.app.config import Settings
from poynts_gateway.app.db.context import CallerIdentity
from poynts_gateway.app.db.organizations import OrganizationRecord, OrganizationRepository
from poynts_gateway.app.errors import ConfigurationError


@dataclass(frozen=True)
class ResolvedCredential:
    """Credential for one outbound call.

    organization_id is None for admin (cross-tenant) routes.
    """

    api_key: str
    organization_id: str | None = None


class CredentialFailureKind(str, Enum):
    """Why a tenant-scoped credential could not be resolved."""

    NO_ORGANIZATION_CONTEXT = "no_organization_context"
    ORGANIZATION_NOT_FOUND = "organization_not_found"


_FAILURE_STATUS = {
    CredentialFailureKind.NO_ORGANIZATION_CONTEXT: status.HTTP_400_BAD_REQUEST,
    CredentialFailureKind.ORGANIZATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


@dataclass(frozen=True)
class CredentialFailure:
    """Resolution failure returned as a value instead of raised."""

    kind: CredentialFailureKind
    message: str

    @property
    def status_code(self) -> int:
        return _FAILURE_STATUS[self.kind]


def require_backend_api_key(settings: Settings) -> str:
    """Return the configured backend key.

    Raises:
        ConfigurationError: If BACKEND_API_KEY is not set
    """
    if not settings.backend_api_key:
        raise ConfigurationError("BACKEND_API_KEY environment variable is not set")
    return settings.backend_api_key


class ApiKeyResolver:
    """Resolves the backend credential and organization scope for a caller.

    The only component that reads the organization mapping.
    """

    def __init__(self, settings: Settings, organizations: OrganizationRepository) -> None:
        self._api_key = require_backend_api_key(settings)
        self._organizations = organizations

    async def resolve(
        self, caller: CallerIdentity, is_admin_route: bool = False
    ) -> ResolvedCredential | CredentialFailure:
        """Resolve which key and organization scope to use.

        Args:
            caller: Identity of the current request
            is_admin_route: Whether the route is cross-organization

        Returns:
            ResolvedCredential, or CredentialFailure when the caller has no
            organization context or the organization is not mapped
        """
        if is_admin_route:
            return ResolvedCredential(api_key=self._api_key, organization_id=None)

        organization = await self.get_organization(caller)
        if isinstance(organization, CredentialFailure):
            return organization

        return ResolvedCredential(api_key=self._api_key, organization_id=organization.id)

    async def get_organization(self, caller: CallerIdentity) -> OrganizationRecord | CredentialFailure:
        """Get the internal organization record for the caller's organization."""
        if not caller.org_id:
            return CredentialFailure(
                kind=CredentialFailureKind.NO_ORGANIZATION_CONTEXT,
                message="No organization context found",
            )

        organization = await self._organizations.find_by_auth_provider_org_id(caller.org_id)
        if organization is None:
            return CredentialFailure(
                kind=CredentialFailureKind.ORGANIZATION_NOT_FOUND,
                message=f"Organization not found for org: {caller.org_id}",
            )

        return organization

    async def organization_exists(self, auth_provider_org_id: str) -> bool:
        """Check whether an identity-provider organization is mapped."""
        return await self._organizations.find_by_auth_provider_org_id(auth_provider_org_id) is not None
