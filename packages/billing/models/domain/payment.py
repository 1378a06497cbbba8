"""
Domain models for the payment ledger.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class Payment(BaseModel):
    id: int
    charge_id: str
    invoice_id: Optional[str] = None
    subscription_id: str
    customer_id: str
    amount: Decimal
    currency: str
    country: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PaymentCreateModel(BaseModel):
    charge_id: str
    invoice_id: Optional[str] = None
    subscription_id: str
    customer_id: str
    amount: Decimal
    currency: str
    country: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
