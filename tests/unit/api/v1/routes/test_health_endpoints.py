from httpx import AsyncClient


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Test health check endpoint."""
        response = await client.get("/api/v1/health/")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "ynter-gateway"}

    async def test_db_health_check(self, client: AsyncClient):
        """Test database health check endpoint."""
        response = await client.get("/api/v1/health/db")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"


class TestPreflight:
    async def test_options_on_any_path(self, client: AsyncClient):
        response = await client.options("/api/v1/banking/link-token")

        assert response.status_code == 200
        assert response.text == "ok"


class TestErrorResponses:
    async def test_gateway_errors_render_reason(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/receipts/search", json={"merchant": "Tartine"}
        )

        assert response.status_code == 401
        assert response.json() == {
            "detail": "Authorization header missing or invalid",
            "reason": "unauthorized",
        }
