"""
Database entity for the payment ledger.
"""

from sqlalchemy import Column, Numeric, String
from sqlalchemy.sql import func

from common.db.base import Base, BigIntegerType, UTCDateTime


class PaymentEntity(Base):
    """
    Append-only payment ledger, one row per settled invoice.

    ``charge_id`` is the dedupe key for webhook redelivery.
    """

    __tablename__ = "payments"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    charge_id = Column(String(255), nullable=False, unique=True, index=True)
    invoice_id = Column(String(255), nullable=True)
    subscription_id = Column(String(255), nullable=False, index=True)
    customer_id = Column(String(255), nullable=False, index=True)

    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    country = Column(String(2), nullable=True)

    customer_email = Column(String(320), nullable=True)
    customer_name = Column(String(255), nullable=True)

    created_at = Column(UTCDateTime, server_default=func.now())
