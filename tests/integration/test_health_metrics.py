"""Integration tests for /health, /healthz and /metrics endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from poynts_gateway.app.api.routes.health import check_backend, check_db
from poynts_gateway.app.config import Settings


class TestHealthEndpoint:
    """Test /healthz endpoint."""

    @patch("poynts_gateway.app.api.routes.health.check_db", new_callable=AsyncMock)
    @patch("poynts_gateway.app.api.routes.health.check_backend", new_callable=AsyncMock)
    def test_healthz_returns_200_when_all_ok(
        self, mock_check_backend: AsyncMock, mock_check_db: AsyncMock, client: TestClient
    ) -> None:
        """Test /healthz returns 200 when DB and backend are healthy."""
        mock_check_db.return_value = (True, "ok")
        mock_check_backend.return_value = (True, "configured")

        response = client.get("/healthz")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["components"] == {"db": "ok", "backend": "configured"}

    @patch("poynts_gateway.app.api.routes.health.check_db", new_callable=AsyncMock)
    @patch("poynts_gateway.app.api.routes.health.check_backend", new_callable=AsyncMock)
    def test_healthz_returns_503_when_db_fails(
        self, mock_check_backend: AsyncMock, mock_check_db: AsyncMock, client: TestClient
    ) -> None:
        """Test /healthz returns 503 when DB check fails."""
        mock_check_db.return_value = (False, "error: OperationalError")
        mock_check_backend.return_value = (True, "configured")

        response = client.get("/healthz")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "degraded"
        assert data["components"]["db"] == "error: OperationalError"

    @patch("poynts_gateway.app.api.routes.health.check_db", new_callable=AsyncMock)
    @patch("poynts_gateway.app.api.routes.health.check_backend", new_callable=AsyncMock)
    def test_healthz_returns_503_when_backend_unconfigured(
        self, mock_check_backend: AsyncMock, mock_check_db: AsyncMock, client: TestClient
    ) -> None:
        mock_check_db.return_value = (True, "ok")
        mock_check_backend.return_value = (False, "not_configured")

        response = client.get("/healthz")

        assert response.status_code == 503
        assert response.json()["components"]["backend"] == "not_configured"

    def test_health_is_always_ok(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestHealthChecks:
    @pytest.mark.asyncio
    async def test_db_not_configured(self) -> None:
        assert await check_db(Settings(database_url=None)) == (False, "not_configured")

    @pytest.mark.asyncio
    async def test_backend_not_configured(self) -> None:
        assert await check_backend(Settings(backend_api_key="")) == (False, "not_configured")

    @pytest.mark.asyncio
    async def test_backend_configured_without_probe(self) -> None:
        settings = Settings(backend_api_key="key", backend_healthcheck_enabled=False)
        assert await check_backend(settings) == (True, "configured")


class TestMetricsEndpoint:
    """Test /metrics endpoint."""

    def test_metrics_returns_prometheus_format(self, client: TestClient) -> None:
        """Test /metrics returns Prometheus text format."""
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    def test_metrics_include_proxy_calls(self, client: TestClient, backend, auth_headers) -> None:
        """Proxied calls show up in the request counter and latency histogram."""
        client.get("/api/v1/orders", headers=auth_headers("org:orders:view"))

        text = client.get("/metrics").text

        assert 'proxy_requests_total{method="GET",outcome="success"}' in text
        assert "proxy_upstream_latency_ms_bucket" in text

    def test_metrics_include_credential_failures(self, client: TestClient, auth_headers) -> None:
        client.get("/api/v1/orders", headers=auth_headers("org:orders:view", org_id="org_ghost"))

        text = client.get("/metrics").text

        assert 'proxy_credential_failures_total{reason="organization_not_found"}' in text


class TestRootEndpoint:
    """Test root endpoint."""

    def test_root_returns_api_info(self, client: TestClient) -> None:
        """Test root endpoint returns API information."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Poynts Gateway"
        assert data["version"] == "0.1.0"
