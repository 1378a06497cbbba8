from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from common.providers.chat_completion.factory import get_chat_completion_provider
from common.providers.chat_completion.interface import ChatCompletionProviderInterface
from common.providers.tokenizer.factory import get_token_counter
from common.providers.tokenizer.interface import TokenCounterInterface
from packages.auth.dependencies import get_bearer_credential
from packages.billing.dependencies import get_usage_gate
from packages.billing.services.usage_gate import UsageGate
from packages.chat.models.schemas.chat import ChatRequest
from packages.chat.services.chat_service import ChatService

router = APIRouter()


def get_chat_service(
    gate: UsageGate = Depends(get_usage_gate),
    token_counter: TokenCounterInterface = Depends(get_token_counter),
    provider: ChatCompletionProviderInterface = Depends(get_chat_completion_provider),
) -> ChatService:
    return ChatService(gate, token_counter, provider)


@router.post("/chat")
async def create_chat_completion(
    request: ChatRequest,
    credential: Optional[str] = Depends(get_bearer_credential),
    chat_service: ChatService = Depends(get_chat_service),
) -> StreamingResponse:
    """Metered chat completion, relayed from the provider byte for byte."""
    relay = await chat_service.complete(credential, request)
    return StreamingResponse(
        relay.body,
        status_code=relay.status_code,
        media_type=relay.content_type,
        background=BackgroundTask(relay.aclose),
    )
