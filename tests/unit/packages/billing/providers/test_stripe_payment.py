import pytest
import stripe
from unittest.mock import MagicMock, patch

from common.core.exceptions import DownstreamProviderError
from packages.billing.providers.payment.stripe_payment import StripePaymentProvider


class TestStripePaymentProvider:
    async def test_create_customer_is_idempotent_per_account(self):
        with patch(
            "stripe.Customer.create", return_value=MagicMock(id="cus_new")
        ) as create:
            customer_id = await StripePaymentProvider().create_customer(
                "acct-1", email="test@example.com"
            )

        assert customer_id == "cus_new"
        create.assert_called_once_with(
            email="test@example.com",
            metadata={"account_id": "acct-1"},
            idempotency_key="account-customer-acct-1",
        )

    async def test_stripe_error(self):
        error = stripe.APIConnectionError("network down")
        with patch("stripe.Customer.create", side_effect=error):
            with pytest.raises(DownstreamProviderError) as exc_info:
                await StripePaymentProvider().create_customer("acct-1")

        assert exc_info.value.context["provider"] == "stripe"
        assert exc_info.value.status_code == 500
