"""
Interface for payment providers.

Abstracts the billing platform away from account onboarding.
"""

from abc import ABC, abstractmethod
from typing import Optional


class PaymentProviderInterface(ABC):
    """Abstract interface for payment providers."""

    @abstractmethod
    async def create_customer(
        self, account_id: str, email: Optional[str] = None
    ) -> str:
        """
        Create a billing customer for an account.

        Repeated calls for the same account return the same customer.

        Returns:
            The provider's customer id

        Raises:
            DownstreamProviderError: If the provider rejects the request
        """
        pass
