from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Response

from common.providers.bank_data.factory import get_bank_data_provider
from common.providers.bank_data.interface import BankDataProviderInterface
from packages.auth.dependencies import get_bearer_credential
from packages.banking.locale import parse_accept_language
from packages.banking.models.schemas.banking import (
    LinkTokenCreateRequest,
    LinkTokenCreateResponse,
    PublicTokenExchangeRequest,
    PublicTokenExchangeResponse,
    RemoveItemRequest,
    TransactionsSyncRequest,
    TransactionsSyncResponse,
)
from packages.banking.services.banking_service import BankingService
from packages.billing.dependencies import get_usage_gate
from packages.billing.services.usage_gate import UsageGate

router = APIRouter()


def get_banking_service(
    gate: UsageGate = Depends(get_usage_gate),
    provider: BankDataProviderInterface = Depends(get_bank_data_provider),
) -> BankingService:
    return BankingService(gate, provider)


@router.post("/link-token", response_model=LinkTokenCreateResponse)
async def create_link_token(
    request: LinkTokenCreateRequest,
    accept_language: Annotated[Optional[str], Header()] = None,
    credential: Optional[str] = Depends(get_bearer_credential),
    banking_service: BankingService = Depends(get_banking_service),
) -> LinkTokenCreateResponse:
    """Link token for connecting a new institution or re-linking an existing one."""
    language, country = parse_accept_language(accept_language)
    return await banking_service.create_link_token(
        credential, request.institution_id, language, country
    )


@router.post("/exchange-public-token", response_model=PublicTokenExchangeResponse)
async def exchange_public_token(
    request: PublicTokenExchangeRequest,
    accept_language: Annotated[Optional[str], Header()] = None,
    credential: Optional[str] = Depends(get_bearer_credential),
    banking_service: BankingService = Depends(get_banking_service),
) -> PublicTokenExchangeResponse:
    _, country = parse_accept_language(accept_language)
    return await banking_service.exchange_public_token(
        credential, request.public_token, country
    )


@router.post("/transactions-sync", response_model=TransactionsSyncResponse)
async def sync_transactions(
    request: TransactionsSyncRequest,
    credential: Optional[str] = Depends(get_bearer_credential),
    banking_service: BankingService = Depends(get_banking_service),
) -> TransactionsSyncResponse:
    return await banking_service.sync_transactions(
        credential, request.institution_id, request.cursor
    )


@router.post("/remove-item")
async def remove_item(
    request: RemoveItemRequest,
    credential: Optional[str] = Depends(get_bearer_credential),
    banking_service: BankingService = Depends(get_banking_service),
) -> Response:
    await banking_service.remove_item(credential, request.institution_id)
    return Response(status_code=200)
