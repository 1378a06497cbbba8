"""
Gate policies for every metered operation.

Bank linking operations share a 12-hour window; every link creates a
billable item at the bank-data provider.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from common.providers.rate_limiter.models import RateLimitPolicy


class MeteredOperation(str, Enum):
    CHAT = "chat"
    BANK_LINK_TOKEN = "bank_link_token"
    BANK_EXCHANGE_TOKEN = "bank_exchange_token"
    BANK_TRANSACTIONS_SYNC = "bank_transactions_sync"
    BANK_REMOVE_ITEM = "bank_remove_item"
    RECEIPT_SEARCH = "receipt_search"


@dataclass(frozen=True)
class GatePolicy:
    operation: MeteredOperation
    rate_limit: Optional[RateLimitPolicy] = None
    requires_entitlement: bool = True
    metered: bool = False


def _window(
    operation: MeteredOperation, limit: int, minutes: int, fail_open: bool
) -> RateLimitPolicy:
    return RateLimitPolicy(
        operation=operation.value,
        limit=limit,
        window_seconds=minutes * 60,
        fail_open=fail_open,
    )


CHAT_POLICY = GatePolicy(
    operation=MeteredOperation.CHAT,
    rate_limit=_window(MeteredOperation.CHAT, 120, 60, fail_open=True),
    metered=True,
)

BANK_LINK_TOKEN_POLICY = GatePolicy(
    operation=MeteredOperation.BANK_LINK_TOKEN,
    rate_limit=_window(MeteredOperation.BANK_LINK_TOKEN, 10, 720, fail_open=False),
)

BANK_EXCHANGE_TOKEN_POLICY = GatePolicy(
    operation=MeteredOperation.BANK_EXCHANGE_TOKEN,
    rate_limit=_window(MeteredOperation.BANK_EXCHANGE_TOKEN, 10, 720, fail_open=False),
)

BANK_TRANSACTIONS_SYNC_POLICY = GatePolicy(
    operation=MeteredOperation.BANK_TRANSACTIONS_SYNC,
    rate_limit=_window(MeteredOperation.BANK_TRANSACTIONS_SYNC, 15, 60, fail_open=False),
)

# Unlinking stays available after a subscription lapses
BANK_REMOVE_ITEM_POLICY = GatePolicy(
    operation=MeteredOperation.BANK_REMOVE_ITEM,
    requires_entitlement=False,
)

RECEIPT_SEARCH_POLICY = GatePolicy(
    operation=MeteredOperation.RECEIPT_SEARCH,
    rate_limit=_window(MeteredOperation.RECEIPT_SEARCH, 60, 60, fail_open=True),
)
