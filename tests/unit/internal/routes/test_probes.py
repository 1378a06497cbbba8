"""Tests for the root-level liveness and readiness probes."""

import pytest
from httpx import AsyncClient


class TestProbeEndpoints:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/healthz", "/readyz"])
    async def test_probe_is_ok(self, client: AsyncClient, path):
        response = await client.get(path)

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_probes_ignore_credentials(self, client: AsyncClient):
        response = await client.get("/readyz", headers={"Authorization": "Bearer junk"})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_probes_are_not_under_api_prefix(self, client: AsyncClient):
        response = await client.get("/api/v1/healthz")

        assert response.status_code != 200
