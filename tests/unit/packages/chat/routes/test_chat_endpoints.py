"""
Unit tests for the chat endpoint.
"""

import pytest
from unittest.mock import AsyncMock

from common.core.exceptions import DownstreamProviderError
from packages.billing.services.entitlement_store import EntitlementStore

CHAT_URL = "/api/v1/chat"

PAYLOAD = {
    "schema": "CREATE TABLE tx (amount REAL)",
    "version": "1",
    "stream": False,
    "useTools": True,
    "messages": [{"role": "user", "content": "What did I spend this week?"}],
}


@pytest.mark.asyncio
class TestChatEndpoint:
    async def test_requires_credential(self, client, sample_subscription, mock_chat_provider):
        response = await client.post(CHAT_URL, json=PAYLOAD)

        assert response.status_code == 401
        assert response.json()["reason"] == "unauthorized"
        mock_chat_provider.open_completion.assert_not_awaited()

    async def test_requires_subscription(self, client, auth_headers, sample_account):
        response = await client.post(CHAT_URL, json=PAYLOAD, headers=auth_headers)

        assert response.status_code == 402

    async def test_relays_completion_and_charges_usage(
        self, client, auth_headers, sample_subscription, mock_chat_provider
    ):
        response = await client.post(CHAT_URL, json=PAYLOAD, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["choices"][0]["message"]["content"] == "Hi"
        mock_chat_provider.aclose.assert_awaited_once()
        subscription = await EntitlementStore().get_subscription("sub_test123")
        assert subscription.usage_tokens > 0

    async def test_quota_exceeded(
        self, client, auth_headers, sample_subscription, mock_chat_provider
    ):
        await EntitlementStore().increment_usage("sub_test123", 15_000_000)

        response = await client.post(CHAT_URL, json=PAYLOAD, headers=auth_headers)

        assert response.status_code == 429
        body = response.json()
        assert body["detail"] == "Max month request reached"
        assert body["values"]["token_used"] == 15_000_000
        assert body["values"]["max"] == 15_000_000
        mock_chat_provider.open_completion.assert_not_awaited()

    async def test_provider_failure_keeps_charge(
        self, client, auth_headers, sample_subscription, mock_chat_provider
    ):
        mock_chat_provider.open_completion = AsyncMock(
            side_effect=DownstreamProviderError("openai", "Rate limit", status_code=429)
        )

        response = await client.post(CHAT_URL, json=PAYLOAD, headers=auth_headers)

        assert response.status_code == 429
        assert response.json()["reason"] == "provider_error"
        subscription = await EntitlementStore().get_subscription("sub_test123")
        assert subscription.usage_tokens > 0

    async def test_empty_messages_rejected(self, client, auth_headers, sample_subscription):
        response = await client.post(
            CHAT_URL, json={**PAYLOAD, "messages": []}, headers=auth_headers
        )

        assert response.status_code == 422

    async def test_options_preflight(self, client):
        response = await client.options(CHAT_URL)

        assert response.status_code == 200
        assert response.text == "ok"
