# Shared pytest configuration and fixtures for all test types
import os

# Settings are read at import time; pin the secrets tests sign with
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-with-enough-length-for-hs256")
os.environ.setdefault("ACCOUNT_WEBHOOK_KEY", "test-account-webhook-key")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test")

import jwt
import pytest
import pytest_asyncio
from datetime import datetime, timezone, timedelta
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import AsyncMock, patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

app.state.limiter = test_limiter

from common.core.config import settings
from common.db.base import Base
from common.providers.bank_data.factory import get_bank_data_provider
from common.providers.chat_completion.factory import get_chat_completion_provider
from common.providers.chat_completion.models import CompletionRelay
from common.providers.places.factory import get_place_search_provider
from common.providers.rate_limiter.factory import get_rate_limiter
from common.providers.rate_limiter.memory_rate_limiter import (
    MemorySlidingWindowRateLimiter,
)
from common.providers.tokenizer.char_estimate_counter import CharacterEstimateCounter
from common.providers.tokenizer.factory import get_token_counter
from packages.accounts.models.database.account import AccountEntity
from packages.auth.providers.factory import get_identity_verifier
from packages.auth.providers.supabase_provider import SupabaseJWTProvider
from packages.banking.models.database.bank_item import BankItemEntity  # noqa: F401
from packages.billing.models.database.payment import PaymentEntity  # noqa: F401
from packages.billing.models.database.subscription import SubscriptionEntity
from packages.billing.providers.payment.factory import get_payment_provider

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_ACCOUNT_ID = "8d6f0c3e-2b1a-4d7e-9f10-5a3c2e1b0d99"
TEST_CUSTOMER_ID = "cus_test123"


def make_access_token(
    account_id: str = TEST_ACCOUNT_ID,
    expires_in: timedelta = timedelta(hours=1),
    secret: str = None,
    audience: str = "authenticated",
    **claims,
) -> str:
    """Sign a Supabase-style access token."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": account_id,
        "aud": audience,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        "email": "test@example.com",
        "role": "authenticated",
        **claims,
    }
    return jwt.encode(payload, secret or settings.supabase_jwt_secret, algorithm="HS256")


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so nested transaction()
    calls create savepoints instead of real nested transactions.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch the session factory to use the test database.

    This allows real transaction() and get_session() to run with proper
    commit/rollback/ContextVar semantics while using the test database.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)


@pytest.fixture
def token_factory():
    """Signer for custom access tokens (expired, wrong secret, other accounts)."""
    return make_access_token


@pytest.fixture
def access_token():
    """A valid bearer token for the test account."""
    return make_access_token()


@pytest.fixture
def auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def identity_verifier():
    return SupabaseJWTProvider(jwt_secret=settings.supabase_jwt_secret)


@pytest.fixture
def rate_limiter():
    return MemorySlidingWindowRateLimiter()


@pytest.fixture
def token_counter():
    return CharacterEstimateCounter()


@pytest.fixture
def mock_chat_provider():
    """Chat provider returning a canned JSON completion."""

    async def body():
        yield b'{"id":"chatcmpl-1","choices":[{"message":{"role":"assistant","content":"Hi"}}]}'

    provider = AsyncMock()
    provider.aclose = AsyncMock(return_value=None)
    provider.open_completion = AsyncMock(
        side_effect=lambda *args, **kwargs: CompletionRelay(
            status_code=200,
            content_type="application/json",
            body=body(),
            aclose=provider.aclose,
        )
    )
    return provider


@pytest.fixture
def mock_bank_data_provider():
    provider = AsyncMock()
    provider.create_link_token = AsyncMock(return_value="link-sandbox-123")
    provider.sync_transactions = AsyncMock(
        return_value={"added": [], "modified": [], "removed": [], "next_cursor": "c1"}
    )
    provider.remove_item = AsyncMock(return_value=None)
    return provider


@pytest.fixture
def mock_place_search_provider():
    provider = AsyncMock()
    provider.search_text = AsyncMock(
        return_value={"places": [{"displayName": {"text": "Blue Bottle Coffee"}}]}
    )
    return provider


@pytest.fixture
def mock_payment_provider():
    provider = AsyncMock()
    provider.create_customer = AsyncMock(return_value=TEST_CUSTOMER_ID)
    return provider


@pytest_asyncio.fixture(scope="function")
async def client(
    identity_verifier,
    rate_limiter,
    token_counter,
    mock_chat_provider,
    mock_bank_data_provider,
    mock_place_search_provider,
    mock_payment_provider,
):
    """Create a test client with every external provider replaced."""
    app.dependency_overrides[get_identity_verifier] = lambda: identity_verifier
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[get_token_counter] = lambda: token_counter
    app.dependency_overrides[get_chat_completion_provider] = lambda: mock_chat_provider
    app.dependency_overrides[get_bank_data_provider] = lambda: mock_bank_data_provider
    app.dependency_overrides[get_place_search_provider] = (
        lambda: mock_place_search_provider
    )
    app.dependency_overrides[get_payment_provider] = lambda: mock_payment_provider

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def sample_account(test_db: AsyncSession):
    """Create an account already linked to a billing customer."""
    account = AccountEntity(
        account_id=TEST_ACCOUNT_ID,
        email="test@example.com",
        customer_id=TEST_CUSTOMER_ID,
    )
    test_db.add(account)
    await test_db.commit()
    await test_db.refresh(account)
    return account


@pytest_asyncio.fixture(scope="function")
async def unlinked_account(test_db: AsyncSession):
    """Create an account that has no billing customer yet."""
    account = AccountEntity(account_id=TEST_ACCOUNT_ID, email="test@example.com")
    test_db.add(account)
    await test_db.commit()
    await test_db.refresh(account)
    return account


@pytest_asyncio.fixture(scope="function")
async def sample_subscription(test_db: AsyncSession, sample_account):
    """Create an active subscription with no usage."""
    subscription = SubscriptionEntity(
        subscription_id="sub_test123",
        customer_id=TEST_CUSTOMER_ID,
        expires_at=datetime.now(timezone.utc) + timedelta(days=30),
        cancel_at_period_end=False,
        usage_tokens=0,
    )
    test_db.add(subscription)
    await test_db.commit()
    await test_db.refresh(subscription)
    return subscription


@pytest_asyncio.fixture(scope="function")
async def expired_subscription(test_db: AsyncSession, sample_account):
    """Create a subscription whose period ended yesterday."""
    subscription = SubscriptionEntity(
        subscription_id="sub_expired123",
        customer_id=TEST_CUSTOMER_ID,
        expires_at=datetime.now(timezone.utc) - timedelta(days=1),
        usage_tokens=0,
    )
    test_db.add(subscription)
    await test_db.commit()
    await test_db.refresh(subscription)
    return subscription

