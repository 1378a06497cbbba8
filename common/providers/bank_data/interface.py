from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from .models import ExchangedItem, Institution, LinkTokenRequest


class BankDataProviderInterface(ABC):
    """Interface for bank-data aggregation providers.

    All methods raise ``DownstreamProviderError`` on provider failures.
    """

    @abstractmethod
    async def create_link_token(self, request: LinkTokenRequest) -> str:
        """Create a short-lived token the client uses to open the link flow."""
        pass

    @abstractmethod
    async def exchange_public_token(self, public_token: str) -> ExchangedItem:
        """Trade the link flow's public token for a permanent access token."""
        pass

    @abstractmethod
    async def get_institution(
        self, access_token: str, country_code: str = "US"
    ) -> Institution:
        """Institution the item behind ``access_token`` belongs to."""
        pass

    @abstractmethod
    async def sync_transactions(
        self, access_token: str, cursor: Optional[str] = None
    ) -> Dict[str, Any]:
        """One page of transaction changes since ``cursor``, as returned upstream."""
        pass

    @abstractmethod
    async def remove_item(self, access_token: str) -> None:
        """Revoke the access token and delete the item upstream."""
        pass
