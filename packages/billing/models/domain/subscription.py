"""
Domain models for subscriptions.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Subscription(BaseModel):
    """
    Subscription domain model.

    A subscription grants entitlement while ``expires_at`` is in the future.
    """

    id: int
    subscription_id: str
    customer_id: str
    expires_at: datetime
    cancel_at_period_end: bool = False
    usage_tokens: int = 0

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubscriptionUpsertModel(BaseModel):
    """Full subscription record as derived from a paid invoice."""

    subscription_id: str
    customer_id: str
    expires_at: datetime


class SubscriptionLifecycleUpdate(BaseModel):
    """Partial lifecycle update; unset fields are left untouched."""

    expires_at: Optional[datetime] = None
    cancel_at_period_end: Optional[bool] = None


class UsageIncrement(BaseModel):
    """Counter values around one atomic usage increment."""

    subscription_id: str
    before: int = Field(ge=0)
    after: int = Field(ge=0)
