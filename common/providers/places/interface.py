from abc import ABC, abstractmethod
from typing import Any, Dict


class PlaceSearchProviderInterface(ABC):
    """Interface for place search providers."""

    @abstractmethod
    async def search_text(self, query: str) -> Dict[str, Any]:
        """
        Free-text place search.

        Returns:
            The provider's response document, unmodified

        Raises:
            DownstreamProviderError: On provider failure
        """
        pass
