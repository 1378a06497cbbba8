from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from common.providers.places.factory import get_place_search_provider
from common.providers.places.interface import PlaceSearchProviderInterface
from packages.auth.dependencies import get_bearer_credential
from packages.billing.dependencies import get_usage_gate
from packages.billing.services.usage_gate import UsageGate
from packages.receipts.models.schemas.receipts import ReceiptSearchRequest
from packages.receipts.services.receipt_search_service import ReceiptSearchService

router = APIRouter()


def get_receipt_search_service(
    gate: UsageGate = Depends(get_usage_gate),
    provider: PlaceSearchProviderInterface = Depends(get_place_search_provider),
) -> ReceiptSearchService:
    return ReceiptSearchService(gate, provider)


@router.post("/search")
async def search_receipt_merchant(
    request: ReceiptSearchRequest,
    credential: Optional[str] = Depends(get_bearer_credential),
    service: ReceiptSearchService = Depends(get_receipt_search_service),
) -> Dict[str, Any]:
    """Places matching a receipt's merchant, as returned by the place provider."""
    return await service.search(credential, request)
