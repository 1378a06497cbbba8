import pytest

SEARCH_URL = "/api/v1/receipts/search"


@pytest.mark.asyncio
class TestReceiptSearch:
    async def test_search_returns_provider_document(
        self, client, auth_headers, sample_subscription, mock_place_search_provider
    ):
        response = await client.post(
            SEARCH_URL,
            json={"merchant": "Blue Bottle", "region": "Oakland CA"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["places"][0]["displayName"]["text"] == "Blue Bottle Coffee"
        mock_place_search_provider.search_text.assert_awaited_once_with(
            "Blue Bottle Oakland CA"
        )

    async def test_requires_subscription(
        self, client, auth_headers, sample_account, mock_place_search_provider
    ):
        response = await client.post(
            SEARCH_URL, json={"merchant": "Blue Bottle"}, headers=auth_headers
        )

        assert response.status_code == 402
        mock_place_search_provider.search_text.assert_not_awaited()

    async def test_merchant_required(self, client, auth_headers, sample_subscription):
        response = await client.post(
            SEARCH_URL, json={"merchant": ""}, headers=auth_headers
        )

        assert response.status_code == 422
