from typing import Any, Dict, Optional

import httpx

from common.core.config import settings
from common.core.exceptions import DownstreamProviderError
from common.core.otel_axiom_exporter import get_logger, trace_span
from .interface import BankDataProviderInterface
from .models import ExchangedItem, Institution, LinkTokenRequest

logger = get_logger(__name__)


class PlaidBankDataProvider(BankDataProviderInterface):
    """Plaid REST API over httpx."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(
            base_url=settings.plaid_base_url,
            timeout=30.0,
            headers={
                "PLAID-CLIENT-ID": settings.plaid_client_id,
                "PLAID-SECRET": settings.plaid_secret,
            },
        )
        self.client_name = settings.plaid_client_name

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.client.post(path, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Plaid request to {path} failed: {e}")
            raise DownstreamProviderError("plaid", "Bank data provider unavailable")

        if response.is_error:
            error_code = None
            if response.headers.get("content-type", "").startswith("application/json"):
                error_code = response.json().get("error_code")
            logger.warning(
                f"Plaid {path} returned {response.status_code}",
                extra={"status_code": response.status_code, "error_code": error_code},
            )
            raise DownstreamProviderError(
                "plaid",
                f"Bank data provider rejected {path}",
                status_code=response.status_code,
                context={"error_code": error_code},
            )
        return response.json()

    @trace_span
    async def create_link_token(self, request: LinkTokenRequest) -> str:
        body: Dict[str, Any] = {
            "user": {"client_user_id": request.client_user_id},
            "products": ["transactions"],
            "client_name": self.client_name,
            "language": request.language,
            "country_codes": [request.country_code],
        }
        if request.access_token:
            body["access_token"] = request.access_token
        data = await self._post("/link/token/create", body)
        return data["link_token"]

    @trace_span
    async def exchange_public_token(self, public_token: str) -> ExchangedItem:
        data = await self._post(
            "/item/public_token/exchange", {"public_token": public_token}
        )
        return ExchangedItem(item_id=data["item_id"], access_token=data["access_token"])

    @trace_span
    async def get_institution(
        self, access_token: str, country_code: str = "US"
    ) -> Institution:
        item = await self._post("/item/get", {"access_token": access_token})
        institution_id = item["item"]["institution_id"]
        data = await self._post(
            "/institutions/get_by_id",
            {"institution_id": institution_id, "country_codes": [country_code]},
        )
        return Institution(
            institution_id=institution_id, name=data["institution"]["name"]
        )

    @trace_span
    async def sync_transactions(
        self, access_token: str, cursor: Optional[str] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"access_token": access_token}
        if cursor:
            body["cursor"] = cursor
        return await self._post("/transactions/sync", body)

    @trace_span
    async def remove_item(self, access_token: str) -> None:
        await self._post("/item/remove", {"access_token": access_token})
