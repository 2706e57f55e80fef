"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator, Callable, Iterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from poynts_gateway.app.api.auth import ORG_ID_HEADER, PERMISSIONS_HEADER, USER_ID_HEADER
from poynts_gateway.app.api.deps import get_backend_http_client, get_organization_repository
from poynts_gateway.app.config import Settings, get_settings
from poynts_gateway.app.db.models import Base
from poynts_gateway.app.db.organizations import InMemoryOrganizationRepository, OrganizationRecord
from poynts_gateway.app.main import create_app

BACKEND_URL = "https://backend.test"
BACKEND_KEY = "test-backend-key"
EXTERNAL_ORG_ID = "org_ext_acme"
INTERNAL_ORG_ID = "8b0a4a4e-1f7e-4a53-9d3c-2f1a6f0c9a11"


class FakeBackend:
    """Records outbound calls and answers them with a configurable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"data": []}
        )

    def respond_with(self, status_code: int, json: Any = None, content: bytes | None = None) -> None:
        """Answer every following call with a fixed response."""
        if json is not None:
            self.handler = lambda request: httpx.Response(status_code, json=json)
        else:
            self.handler = lambda request: httpx.Response(status_code, content=content or b"")

    def raise_error(self, error: Exception) -> None:
        """Make every following call fail at the transport level."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        self.handler = handler

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake backend."""
    return Settings(
        backend_api_key=BACKEND_KEY,
        backend_api_url=BACKEND_URL,
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def organizations() -> InMemoryOrganizationRepository:
    """Organization mapping with a single tenant."""
    return InMemoryOrganizationRepository(
        [
            OrganizationRecord(
                id=INTERNAL_ORG_ID,
                name="Acme Rewards",
                status="active",
                auth_provider_org_id=EXTERNAL_ORG_ID,
            )
        ]
    )


@pytest.fixture
def app(
    settings: Settings, backend: FakeBackend, organizations: InMemoryOrganizationRepository
) -> Iterator[FastAPI]:
    """Application wired to the fake backend and in-memory organizations."""
    application = create_app(settings)
    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_organization_repository] = lambda: organizations
    application.dependency_overrides[get_backend_http_client] = backend.client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)


def _auth_headers(
    *permissions: str, user_id: str = "user_123", org_id: str | None = EXTERNAL_ORG_ID
) -> dict[str, str]:
    headers = {USER_ID_HEADER: user_id, PERMISSIONS_HEADER: ",".join(permissions)}
    if org_id is not None:
        headers[ORG_ID_HEADER] = org_id
    return headers


@pytest.fixture
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build identity headers as forwarded by the identity-provider edge."""
    return _auth_headers


@pytest.fixture
def internal_org_id() -> str:
    return INTERNAL_ORG_ID


@pytest.fixture
def external_org_id() -> str:
    return EXTERNAL_ORG_ID


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory aiosqlite engine with the organization schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSession(sqlite_engine) as session:
        yield session
        await session.rollback()
