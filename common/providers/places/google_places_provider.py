from typing import Any, Dict, Optional

import httpx

from common.core.config import settings
from common.core.exceptions import DownstreamProviderError
from common.core.otel_axiom_exporter import get_logger, trace_span
from .interface import PlaceSearchProviderInterface

logger = get_logger(__name__)

SEARCH_TEXT_URL = "https://places.googleapis.com/v1/places:searchText"

# Fields a receipt needs to identify and contact a merchant
FIELD_MASK = ",".join(
    [
        "places.displayName",
        "places.websiteUri",
        "places.internationalPhoneNumber",
        "places.formattedAddress",
        "places.rating",
        "places.businessStatus",
        "places.primaryType",
        "places.googleMapsUri",
    ]
)


class GooglePlacesProvider(PlaceSearchProviderInterface):
    """Google Places API (New) text search."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(timeout=15.0)
        self.api_key = settings.google_places_api_key

    @trace_span
    async def search_text(self, query: str) -> Dict[str, Any]:
        try:
            response = await self.client.post(
                SEARCH_TEXT_URL,
                json={"textQuery": query},
                headers={
                    "X-Goog-Api-Key": self.api_key,
                    "X-Goog-FieldMask": FIELD_MASK,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Places search failed: {e}")
            raise DownstreamProviderError("google_places", "Place search unavailable")

        if response.is_error:
            logger.warning(
                f"Places search returned {response.status_code}",
                extra={"status_code": response.status_code},
            )
            raise DownstreamProviderError(
                "google_places",
                "Place search failed",
                status_code=response.status_code,
            )
        return response.json()
