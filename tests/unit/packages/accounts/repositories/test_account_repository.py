import pytest

from packages.accounts.repositories.account_repository import AccountRepository


@pytest.mark.asyncio
class TestAccountRepository:
    async def test_get_by_account_id(self, sample_account):
        repo = AccountRepository()

        account = await repo.get_by_account_id(sample_account.account_id)

        assert account.id == sample_account.id
        assert account.customer_id == "cus_test123"

    async def test_get_by_account_id_not_found(self):
        repo = AccountRepository()

        assert await repo.get_by_account_id("missing") is None

    async def test_attach_customer_id(self, unlinked_account):
        repo = AccountRepository()

        account = await repo.attach_customer_id(unlinked_account.account_id, "cus_new")

        assert account.customer_id == "cus_new"
        stored = await repo.get_by_account_id(unlinked_account.account_id)
        assert stored.customer_id == "cus_new"

    async def test_attach_customer_id_never_overwrites(self, sample_account):
        repo = AccountRepository()

        assert await repo.attach_customer_id(sample_account.account_id, "cus_other") is None

        stored = await repo.get_by_account_id(sample_account.account_id)
        assert stored.customer_id == "cus_test123"
