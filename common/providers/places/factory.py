from typing import Optional

from .google_places_provider import GooglePlacesProvider
from .interface import PlaceSearchProviderInterface

_place_search_provider: Optional[PlaceSearchProviderInterface] = None


def get_place_search_provider() -> PlaceSearchProviderInterface:
    global _place_search_provider

    if _place_search_provider is None:
        _place_search_provider = GooglePlacesProvider()

    return _place_search_provider
