"""
Tests for health check endpoints
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from helpdesk import __version__
from helpdesk.dependencies import get_ticket_repository
from helpdesk.main import app
from helpdesk.routes import health

client = TestClient(app)


class TestBasicHealthCheck:
    """Test basic health check endpoint"""

    def test_basic_health_returns_200(self):
        response = client.get("/api/v1/health")
        assert response.status_code == 200

    def test_basic_health_response_structure(self):
        data = client.get("/api/v1/health").json()

        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["uptime_seconds"] >= 0
        assert "timestamp" in data


class TestDependencyHealthCheck:
    """Test dependency health check endpoint"""

    @pytest.fixture(autouse=True)
    def reset_cache(self):
        health._dependency_cache = None
        health._cache_timestamp = 0.0
        app.dependency_overrides[get_ticket_repository] = lambda: MagicMock()
        yield
        app.dependency_overrides.clear()

    def test_all_healthy(self):
        with patch.object(health, "check_supabase_auth", new_callable=AsyncMock) as auth_check:
            auth_check.return_value = health.DependencyStatus(name="supabase_auth", status="healthy")
            response = client.get("/api/v1/health/dependencies")

        data = response.json()
        assert response.status_code == 200
        assert data["overall_status"] == "healthy"
        assert data["dependencies"]["supabase_db"]["status"] == "healthy"

    def test_database_failure_is_unhealthy(self):
        broken = MagicMock()
        broken.table.side_effect = Exception("connection refused")
        app.dependency_overrides[get_ticket_repository] = lambda: broken

        with patch.object(health, "check_supabase_auth", new_callable=AsyncMock) as auth_check:
            auth_check.return_value = health.DependencyStatus(name="supabase_auth", status="healthy")
            data = client.get("/api/v1/health/dependencies").json()

        assert data["overall_status"] == "unhealthy"
        assert data["dependencies"]["supabase_db"]["error_message"] == "connection refused"


class TestDetermineOverallStatus:
    def test_degraded_when_auth_unconfigured(self):
        deps = {
            "supabase_db": health.DependencyStatus(name="supabase_db", status="healthy"),
            "supabase_auth": health.DependencyStatus(name="supabase_auth", status="degraded"),
        }
        assert health.determine_overall_status(deps) == "degraded"
