import json
import httpx
import pytest

from common.core.exceptions import DownstreamProviderError
from common.providers.places.google_places_provider import (
    FIELD_MASK,
    SEARCH_TEXT_URL,
    GooglePlacesProvider,
)


def _provider(handler) -> GooglePlacesProvider:
    return GooglePlacesProvider(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )


class TestGooglePlacesProvider:
    async def test_search_text(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["headers"] = request.headers
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"places": [{"displayName": {"text": "Tartine"}}]})

        result = await _provider(handler).search_text("Tartine San Francisco")

        assert result == {"places": [{"displayName": {"text": "Tartine"}}]}
        assert seen["url"] == SEARCH_TEXT_URL
        assert seen["body"] == {"textQuery": "Tartine San Francisco"}
        assert seen["headers"]["X-Goog-FieldMask"] == FIELD_MASK

    async def test_error_status_propagates(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"error": {"status": "PERMISSION_DENIED"}})

        with pytest.raises(DownstreamProviderError) as exc_info:
            await _provider(handler).search_text("Tartine")

        assert exc_info.value.status_code == 403
