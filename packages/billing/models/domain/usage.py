"""
Domain models for metered usage.
"""

from typing import Optional
from pydantic import BaseModel, Field

from packages.accounts.models.domain.account import Account
from packages.auth.models.domain.verified_identity import VerifiedIdentity
from packages.billing.models.domain.subscription import Subscription, UsageIncrement


class RequestCost(BaseModel):
    """Token cost of one metered request, computed once before admission."""

    overhead_tokens: int = Field(default=0, ge=0)
    message_tokens: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.overhead_tokens + self.message_tokens


class UsageEvent(BaseModel):
    """Logged record of one usage charge."""

    account_id: str
    subscription_id: str
    operation: str
    tokens_used: int
    tokens_before: int
    tokens_after: int


class Admission(BaseModel):
    """Outcome of a request that passed every gate stage."""

    operation: str
    identity: VerifiedIdentity
    account: Optional[Account] = None
    subscription: Optional[Subscription] = None
    cost: Optional[RequestCost] = None
    usage: Optional[UsageIncrement] = None

    @property
    def customer_id(self) -> Optional[str]:
        return self.account.customer_id if self.account else None
