"""Tests for CORS, security headers, and rate limiting middleware."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wyo_alerts.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, get_client_ip, setup_cors
from wyo_alerts.core.config import Settings


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/test")
    async def test_route() -> dict:
        return {"ok": True}

    @app.post("/test")
    async def test_post_route() -> dict:
        return {"ok": True}

    return app


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_security_headers_present(self, client: TestClient) -> None:
        response = client.get("/test")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=3)
        return TestClient(app)

    def test_requests_within_limit_succeed(self, client: TestClient) -> None:
        for _ in range(3):
            assert client.post("/test").status_code == 200

    def test_request_over_limit_returns_429(self, client: TestClient) -> None:
        for _ in range(3):
            client.post("/test")
        response = client.post("/test")
        assert response.status_code == 429
        assert response.json() == {"error": "Rate limit exceeded"}

    def test_limit_is_per_client_ip(self, client: TestClient) -> None:
        for _ in range(3):
            client.post("/test", headers={"X-Forwarded-For": "10.0.0.1"})
        response = client.post("/test", headers={"X-Forwarded-For": "10.0.0.2"})
        assert response.status_code == 200

    def test_reads_are_not_limited(self, client: TestClient) -> None:
        for _ in range(3):
            client.post("/test")
        assert client.get("/test").status_code == 200

    def test_window_slides(self) -> None:
        limiter = RateLimitMiddleware(_create_test_app(), requests_per_minute=2)
        assert limiter._allow("1.1.1.1", 10.0)
        assert limiter._allow("1.1.1.1", 11.0)
        assert not limiter._allow("1.1.1.1", 12.0)
        assert limiter._allow("1.1.1.1", 71.0)

    def test_idle_clients_are_forgotten(self) -> None:
        """Clients with no hits left in the window do not keep state around."""
        limiter = RateLimitMiddleware(_create_test_app(), requests_per_minute=2)
        limiter._allow("1.1.1.1", 100.0)
        limiter._allow("2.2.2.2", 130.0)
        limiter._allow("3.3.3.3", 161.0)
        assert set(limiter._hits) == {"2.2.2.2", "3.3.3.3"}


class TestCors:
    """Tests for the signup-form CORS policy."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        settings = Settings(database_url="sqlite+aiosqlite:///:memory:", cors_origins="https://wyo.example")
        setup_cors(app, settings)
        return TestClient(app)

    def test_preflight_allows_form_headers(self, client: TestClient) -> None:
        response = client.options(
            "/test",
            headers={
                "Origin": "https://wyo.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "apikey, content-type",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "https://wyo.example"

    def test_other_origins_not_allowed(self, client: TestClient) -> None:
        response = client.get("/test", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers


class TestGetClientIp:
    """Tests for get_client_ip."""

    def _request(self, headers: dict[str, str], host: str | None = "1.2.3.4") -> MagicMock:
        request = MagicMock()
        request.headers = headers
        request.client = MagicMock(host=host) if host else None
        return request

    def test_forwarded_for_uses_leftmost(self) -> None:
        request = self._request({"X-Forwarded-For": "9.9.9.9, 10.0.0.1"})
        assert get_client_ip(request) == "9.9.9.9"

    def test_falls_back_to_client_host(self) -> None:
        assert get_client_ip(self._request({})) == "1.2.3.4"

    def test_no_trusted_headers(self) -> None:
        request = self._request({"X-Real-IP": "9.9.9.9"})
        assert get_client_ip(request, trusted_headers=[]) == "1.2.3.4"

    def test_unknown_without_client(self) -> None:
        assert get_client_ip(self._request({}, host=None)) == "unknown"
