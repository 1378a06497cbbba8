from typing import Any, Dict, Optional

from common.core.otel_axiom_exporter import trace_span
from common.providers.places.interface import PlaceSearchProviderInterface
from packages.billing.policies import RECEIPT_SEARCH_POLICY
from packages.billing.services.usage_gate import UsageGate
from packages.receipts.models.schemas.receipts import ReceiptSearchRequest


class ReceiptSearchService:
    def __init__(self, gate: UsageGate, provider: PlaceSearchProviderInterface):
        self.gate = gate
        self.provider = provider

    @trace_span
    async def search(
        self, credential: Optional[str], request: ReceiptSearchRequest
    ) -> Dict[str, Any]:
        await self.gate.admit(credential, RECEIPT_SEARCH_POLICY)
        return await self.provider.search_text(request.text_query)
