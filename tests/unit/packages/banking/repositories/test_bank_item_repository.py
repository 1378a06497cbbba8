import pytest

from packages.banking.models.domain.bank_item import BankItemUpsertModel
from packages.banking.repositories.bank_item_repository import BankItemRepository


def _item(institution_id: str, item_id: str = None, token: str = None) -> BankItemUpsertModel:
    return BankItemUpsertModel(
        item_id=item_id or f"item-{institution_id}",
        customer_id="cus_test123",
        institution_id=institution_id,
        institution_name=f"Bank {institution_id}",
        access_token=token or f"access-sandbox-{institution_id}",
    )


@pytest.mark.asyncio
class TestBankItemRepository:
    async def test_upsert_and_count(self):
        repo = BankItemRepository()

        await repo.upsert(_item("ins_1"))
        await repo.upsert(_item("ins_2"))

        assert await repo.count_for_customer("cus_test123") == 2
        assert await repo.count_for_customer("cus_other") == 0

    async def test_relinking_replaces_token(self):
        repo = BankItemRepository()
        await repo.upsert(_item("ins_1"))

        relinked = await repo.upsert(_item("ins_1", item_id="item-new", token="access-new"))

        assert relinked.access_token == "access-new"
        assert await repo.count_for_customer("cus_test123") == 1
        stored = await repo.get_for_institution("cus_test123", "ins_1")
        assert stored.item_id == "item-new"

    async def test_delete_for_institution(self):
        repo = BankItemRepository()
        await repo.upsert(_item("ins_1"))

        assert await repo.delete_for_institution("cus_test123", "ins_1") == 1
        assert await repo.delete_for_institution("cus_test123", "ins_1") == 0
        assert await repo.get_for_institution("cus_test123", "ins_1") is None
