"""
Stripe implementation of payment provider.
"""

import asyncio
from typing import Optional
import stripe

from common.core.config import settings
from common.core.exceptions import DownstreamProviderError
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.billing.providers.payment.interface import PaymentProviderInterface

logger = get_logger(__name__)


class StripePaymentProvider(PaymentProviderInterface):
    """Stripe-based payment implementation."""

    def __init__(self):
        stripe.api_key = settings.stripe_secret_key

    @trace_span
    async def create_customer(
        self, account_id: str, email: Optional[str] = None
    ) -> str:
        try:
            # Stripe replays the original response for a repeated idempotency key
            customer = await asyncio.to_thread(
                stripe.Customer.create,
                email=email,
                metadata={"account_id": account_id},
                idempotency_key=f"account-customer-{account_id}",
            )
        except stripe.StripeError as e:
            logger.error(
                f"Stripe customer creation failed: {e}",
                extra={"account_id": account_id},
            )
            raise DownstreamProviderError(
                "stripe",
                "Customer creation failed",
                status_code=getattr(e, "http_status", None),
            )

        logger.info(
            "Created Stripe customer",
            extra={"account_id": account_id, "customer_id": customer.id},
        )
        return customer.id
