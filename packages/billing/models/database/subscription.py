"""
Database entity for subscriptions.
"""

from sqlalchemy import Boolean, Column, String, Index, false
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType, UTCDateTime


class SubscriptionEntity(Base):
    """
    Subscription database entity.

    One row per billing-provider subscription. Rows are upserted from payment
    webhooks, their lifecycle columns follow subscription events and
    ``usage_tokens`` is incremented by the usage gate. Rows are never deleted.
    """

    __tablename__ = "subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    subscription_id = Column(String(255), nullable=False, unique=True, index=True)
    customer_id = Column(String(255), nullable=False, index=True)

    expires_at = Column(UTCDateTime, nullable=False)
    cancel_at_period_end = Column(Boolean, nullable=False, server_default=false())

    # Tokens consumed in the current billing period
    usage_tokens = Column(BigIntegerType, nullable=False, server_default="0")

    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_subscription_customer_expires", "customer_id", "expires_at"),
    )
