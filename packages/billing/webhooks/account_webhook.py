"""
Database webhook fired when a new account row is inserted.

Creates the Stripe customer for the account and stores its id. The shared
secret in the Authorization header is the only credential.
"""

import secrets
from typing import Annotated, Optional

from fastapi import Header, HTTPException, status

from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger
from packages.billing.models.schemas.webhooks import (
    AccountCreatedResponse,
    AccountCreatedWebhook,
)
from packages.billing.providers.payment.interface import PaymentProviderInterface
from packages.billing.services.entitlement_store import EntitlementStore

logger = get_logger(__name__)


async def verify_webhook_key(
    authorization: Annotated[Optional[str], Header()] = None,
) -> None:
    expected = settings.account_webhook_key
    if not expected or not authorization or not secrets.compare_digest(
        authorization.encode(), expected.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid webhook key"
        )


async def handle_account_created(
    payload: AccountCreatedWebhook,
    store: EntitlementStore,
    payment_provider: PaymentProviderInterface,
) -> AccountCreatedResponse:
    account_id = payload.record.id

    existing = await store.get_account(account_id)
    if existing and existing.customer_id:
        logger.info(
            f"Account {account_id} already has a billing customer",
            extra={"account_id": account_id, "customer_id": existing.customer_id},
        )
        return AccountCreatedResponse(
            account_id=account_id, customer_id=existing.customer_id, created=False
        )

    customer_id = await payment_provider.create_customer(
        account_id, email=payload.record.email
    )
    account = await store.attach_customer_id(account_id, customer_id)
    if account is None:
        logger.warning(
            f"Could not attach customer {customer_id} to account {account_id}",
            extra={"account_id": account_id, "customer_id": customer_id},
        )
    return AccountCreatedResponse(
        account_id=account_id, customer_id=customer_id, created=account is not None
    )
