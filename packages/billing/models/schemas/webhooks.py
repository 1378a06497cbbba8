"""
Request/response schemas for billing webhooks.
"""

from typing import Optional
from pydantic import BaseModel, Field


class AccountRecord(BaseModel):
    id: str
    email: Optional[str] = None


class AccountCreatedWebhook(BaseModel):
    """Database webhook sent when a row is inserted into ``accounts``."""

    type: str = "INSERT"
    table: str = "accounts"
    record: AccountRecord
    old_record: Optional[dict] = None


class AccountCreatedResponse(BaseModel):
    account_id: str
    customer_id: Optional[str] = None
    created: bool = Field(
        description="False when the account already had a billing customer"
    )


class WebhookAck(BaseModel):
    ok: bool = True
