"""
Bank linking service.

Every call is admitted by the usage gate first. Linking is capped per
customer because each linked institution is billed by the bank-data provider.
"""

from typing import Optional

from common.core.constants import MAX_LINKED_INSTITUTIONS
from common.core.exceptions import LinkLimitExceededError, NotFoundError
from common.core.otel_axiom_exporter import get_logger, trace_span
from common.providers.bank_data.interface import BankDataProviderInterface
from common.providers.bank_data.models import LinkTokenRequest
from packages.banking.models.domain.bank_item import BankItemUpsertModel
from packages.banking.models.schemas.banking import (
    LinkTokenCreateResponse,
    PublicTokenExchangeResponse,
    TransactionsSyncResponse,
)
from packages.banking.repositories.bank_item_repository import BankItemRepository
from packages.billing.policies import (
    BANK_EXCHANGE_TOKEN_POLICY,
    BANK_LINK_TOKEN_POLICY,
    BANK_REMOVE_ITEM_POLICY,
    BANK_TRANSACTIONS_SYNC_POLICY,
)
from packages.billing.services.usage_gate import UsageGate

logger = get_logger(__name__)


class BankingService:
    def __init__(
        self,
        gate: UsageGate,
        provider: BankDataProviderInterface,
        bank_item_repo: Optional[BankItemRepository] = None,
    ):
        self.gate = gate
        self.provider = provider
        self.bank_item_repo = bank_item_repo or BankItemRepository()

    @trace_span
    async def create_link_token(
        self,
        credential: Optional[str],
        institution_id: Optional[str],
        language: str,
        country_code: str,
    ) -> LinkTokenCreateResponse:
        admission = await self.gate.admit(credential, BANK_LINK_TOKEN_POLICY)
        customer_id = admission.customer_id

        access_token = None
        if institution_id:
            item = await self.bank_item_repo.get_for_institution(
                customer_id, institution_id
            )
            access_token = item.access_token if item else None
        else:
            linked = await self.bank_item_repo.count_for_customer(customer_id)
            if linked >= MAX_LINKED_INSTITUTIONS:
                logger.info(
                    f"Customer {customer_id} reached the institution limit",
                    extra={"customer_id": customer_id, "linked": linked},
                )
                raise LinkLimitExceededError(
                    "Limit exceeded",
                    context={"linked": linked, "max": MAX_LINKED_INSTITUTIONS},
                )

        link_token = await self.provider.create_link_token(
            LinkTokenRequest(
                client_user_id=admission.identity.account_id,
                language=language,
                country_code=country_code,
                access_token=access_token,
            )
        )
        return LinkTokenCreateResponse(link_token=link_token, access_token=access_token)

    @trace_span
    async def exchange_public_token(
        self, credential: Optional[str], public_token: str, country_code: str
    ) -> PublicTokenExchangeResponse:
        admission = await self.gate.admit(credential, BANK_EXCHANGE_TOKEN_POLICY)

        exchanged = await self.provider.exchange_public_token(public_token)
        institution = await self.provider.get_institution(
            exchanged.access_token, country_code=country_code
        )
        await self.bank_item_repo.upsert(
            BankItemUpsertModel(
                item_id=exchanged.item_id,
                customer_id=admission.customer_id,
                institution_id=institution.institution_id,
                institution_name=institution.name,
                access_token=exchanged.access_token,
            )
        )
        logger.info(
            f"Linked institution {institution.institution_id}",
            extra={
                "customer_id": admission.customer_id,
                "institution_id": institution.institution_id,
                "item_id": exchanged.item_id,
            },
        )
        return PublicTokenExchangeResponse(
            institution_id=institution.institution_id,
            institution_name=institution.name,
        )

    @trace_span
    async def sync_transactions(
        self, credential: Optional[str], institution_id: str, cursor: Optional[str]
    ) -> TransactionsSyncResponse:
        admission = await self.gate.admit(credential, BANK_TRANSACTIONS_SYNC_POLICY)

        item = await self.bank_item_repo.get_for_institution(
            admission.customer_id, institution_id
        )
        if item is None:
            raise NotFoundError(f"Institution {institution_id} is not linked")

        data = await self.provider.sync_transactions(item.access_token, cursor=cursor)
        return TransactionsSyncResponse(data=data)

    @trace_span
    async def remove_item(self, credential: Optional[str], institution_id: str) -> None:
        admission = await self.gate.admit(credential, BANK_REMOVE_ITEM_POLICY)
        customer_id = admission.customer_id
        if not customer_id:
            return

        item = await self.bank_item_repo.get_for_institution(customer_id, institution_id)
        if item and item.access_token:
            await self.provider.remove_item(item.access_token)

        removed = await self.bank_item_repo.delete_for_institution(
            customer_id, institution_id
        )
        logger.info(
            f"Removed institution {institution_id}",
            extra={"customer_id": customer_id, "removed_rows": removed},
        )
