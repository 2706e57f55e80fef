"""Organization mapping lookups.

Maps identity-provider organization ids to internal organization records.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from poynts_gateway.app.db.models import Organization


@dataclass(frozen=True)
class OrganizationRecord:
    """Internal organization record."""

    id: str
    name: str
    status: str | None
    auth_provider_org_id: str


class OrganizationRepository(Protocol):
    """Read-only access to the organization mapping."""

    async def find_by_auth_provider_org_id(self, auth_provider_org_id: str) -> OrganizationRecord | None:
        """Find the organization mapped to an identity-provider org id.

        Args:
            auth_provider_org_id: Organization id issued by the identity provider

        Returns:
            The matching record, or None when no mapping exists
        """
        ...


class SqlOrganizationRepository:
    """SQL implementation of OrganizationRepository.

    A session is opened per lookup, so callers that never look up an
    organization (admin routes) never touch the database.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_by_auth_provider_org_id(self, auth_provider_org_id: str) -> OrganizationRecord | None:
        """Find organization by identity-provider org id."""
        stmt = select(Organization).where(Organization.auth_provider_org_id == auth_provider_org_id)
        async with self._session_factory() as session:
            row = (await session.execute(stmt)).scalars().first()

        if row is None:
            return None

        return OrganizationRecord(
            id=row.id,
            name=row.name,
            status=row.status,
            auth_provider_org_id=row.auth_provider_org_id,
        )


class InMemoryOrganizationRepository:
    """In-memory implementation of OrganizationRepository."""

    def __init__(self, records: list[OrganizationRecord] | None = None) -> None:
        self._by_external_id: dict[str, OrganizationRecord] = {}
        for record in records or []:
            self.add(record)

    def add(self, record: OrganizationRecord) -> None:
        """Register an organization mapping."""
        self._by_external_id[record.auth_provider_org_id] = record

    async def find_by_auth_provider_org_id(self, auth_provider_org_id: str) -> OrganizationRecord | None:
        """Find organization by identity-provider org id."""
        return self._by_external_id.get(auth_provider_org_id)
