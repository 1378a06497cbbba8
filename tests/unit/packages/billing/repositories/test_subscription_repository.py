"""
Unit tests for SubscriptionRepository.

Tests database operations for subscriptions without mocking the database.
"""

import pytest
from datetime import datetime, timezone, timedelta

from packages.billing.repositories.subscription_repository import SubscriptionRepository
from packages.billing.models.domain.subscription import (
    SubscriptionLifecycleUpdate,
    SubscriptionUpsertModel,
)


@pytest.mark.asyncio
class TestSubscriptionRepository:
    """Tests for SubscriptionRepository."""

    async def test_get_by_subscription_id(self, sample_subscription):
        repo = SubscriptionRepository()

        subscription = await repo.get_by_subscription_id("sub_test123")

        assert subscription is not None
        assert subscription.id == sample_subscription.id
        assert subscription.customer_id == "cus_test123"
        assert subscription.expires_at.tzinfo is not None

    async def test_get_by_subscription_id_not_found(self):
        repo = SubscriptionRepository()

        assert await repo.get_by_subscription_id("sub_missing") is None

    async def test_get_active_for_customer_ignores_expired(self, expired_subscription):
        repo = SubscriptionRepository()

        assert await repo.get_active_for_customer("cus_test123") is None

    async def test_get_active_for_customer_prefers_latest_expiry(
        self, sample_subscription
    ):
        repo = SubscriptionRepository()
        later = datetime.now(timezone.utc) + timedelta(days=60)
        await repo.upsert(
            SubscriptionUpsertModel(
                subscription_id="sub_later",
                customer_id="cus_test123",
                expires_at=later,
            ),
            reset_usage=True,
        )

        active = await repo.get_active_for_customer("cus_test123")

        assert active.subscription_id == "sub_later"

    async def test_expiry_boundary_is_exclusive(self, sample_subscription):
        """A subscription expiring exactly now is no longer active."""
        repo = SubscriptionRepository()
        now = sample_subscription.expires_at

        assert await repo.get_active_for_customer("cus_test123", now=now) is None

    async def test_increment_usage(self, sample_subscription):
        repo = SubscriptionRepository()

        first = await repo.increment_usage("sub_test123", 100)
        second = await repo.increment_usage("sub_test123", 50)

        assert (first.before, first.after) == (0, 100)
        assert (second.before, second.after) == (100, 150)
        stored = await repo.get_by_subscription_id("sub_test123")
        assert stored.usage_tokens == 150

    async def test_increment_usage_respects_cap(self, sample_subscription):
        repo = SubscriptionRepository()
        await repo.increment_usage("sub_test123", 90)

        assert await repo.increment_usage("sub_test123", 11, cap=100) is None
        at_cap = await repo.increment_usage("sub_test123", 10, cap=100)

        assert at_cap.after == 100

    async def test_increment_usage_unknown_subscription(self):
        repo = SubscriptionRepository()

        assert await repo.increment_usage("sub_missing", 10) is None

    async def test_upsert_inserts_with_zero_usage(self):
        repo = SubscriptionRepository()
        expires = datetime(2030, 1, 31, tzinfo=timezone.utc)

        created = await repo.upsert(
            SubscriptionUpsertModel(
                subscription_id="sub_new", customer_id="cus_new", expires_at=expires
            ),
            reset_usage=False,
        )

        assert created.subscription_id == "sub_new"
        assert created.usage_tokens == 0
        assert created.expires_at == expires

    async def test_upsert_resets_usage_only_when_asked(self, sample_subscription):
        repo = SubscriptionRepository()
        await repo.increment_usage("sub_test123", 500)
        record = SubscriptionUpsertModel(
            subscription_id="sub_test123",
            customer_id="cus_test123",
            expires_at=datetime(2030, 2, 28, tzinfo=timezone.utc),
        )

        kept = await repo.upsert(record, reset_usage=False)
        assert kept.usage_tokens == 500

        reset = await repo.upsert(record, reset_usage=True)
        assert reset.usage_tokens == 0
        assert reset.id == sample_subscription.id

    async def test_update_lifecycle_partial(self, sample_subscription):
        repo = SubscriptionRepository()
        await repo.increment_usage("sub_test123", 42)

        updated = await repo.update_lifecycle(
            "sub_test123", SubscriptionLifecycleUpdate(cancel_at_period_end=True)
        )

        assert updated is True
        stored = await repo.get_by_subscription_id("sub_test123")
        assert stored.cancel_at_period_end is True
        assert stored.usage_tokens == 42
        assert stored.expires_at == sample_subscription.expires_at

    async def test_update_lifecycle_unknown_subscription(self):
        repo = SubscriptionRepository()

        updated = await repo.update_lifecycle(
            "sub_missing",
            SubscriptionLifecycleUpdate(expires_at=datetime.now(timezone.utc)),
        )

        assert updated is False
