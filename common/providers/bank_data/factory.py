from typing import Optional

from .interface import BankDataProviderInterface
from .plaid_provider import PlaidBankDataProvider

_bank_data_provider: Optional[BankDataProviderInterface] = None


def get_bank_data_provider() -> BankDataProviderInterface:
    """Get the bank-data provider, sharing one HTTP client per process."""
    global _bank_data_provider

    if _bank_data_provider is None:
        _bank_data_provider = PlaidBankDataProvider()

    return _bank_data_provider
