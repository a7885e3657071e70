"""Tests for health check endpoints."""

from unittest.mock import AsyncMock

from shared.exceptions import ExternalServiceError


class TestHealthEndpoints:
    def test_health_check(self, client):
        """Health endpoint should return 200 with status and version."""
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": "0.1.0"}

    def test_readiness_check(self, client):
        """The in-memory store is always reachable."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready", "persistence": "memory", "user_store": "connected"}

    def test_readiness_store_down(self, client, container):
        """Store failures report not_ready instead of erroring."""
        container.users.find_by_id = AsyncMock(
            side_effect=ExternalServiceError("down", service="supabase")
        )
        response = client.get("/api/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "not_ready"
        assert response.json()["user_store"] == "unavailable"


class TestApiRateLimit:
    def test_health_routes_are_rate_limited(self, container):
        """Everything outside /auth uses the general API limiter."""
        from fastapi.testclient import TestClient

        from api.app import create_app
        from api.dependencies import ServiceContainer, set_container
        from conftest import make_settings

        set_container(ServiceContainer(make_settings(api_rate_limit_requests=2)))
        client = TestClient(create_app())

        assert client.get("/api/health").status_code == 200
        assert client.get("/api/health").status_code == 200
        response = client.get("/api/health")
        assert response.status_code == 429
        assert response.json()["detail"] == "Rate limit exceeded"
