from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional

import openai
from openai import AsyncOpenAI

from common.core.config import settings
from common.core.exceptions import DownstreamProviderError
from common.core.otel_axiom_exporter import get_logger, trace_span
from .interface import ChatCompletionProviderInterface
from .models import CompletionRelay

logger = get_logger(__name__)


class OpenAIChatCompletionProvider(ChatCompletionProviderInterface):
    """OpenAI chat completions, read as a raw HTTP response for byte relay."""

    def __init__(
        self,
        client: Optional[AsyncOpenAI] = None,
        model_name: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ):
        self.client = client or AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout_seconds,
        )
        self.model_name = model_name or settings.openai_model
        self.max_tokens = max_tokens or settings.openai_max_tokens

    @trace_span
    async def open_completion(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        stream: bool = False,
    ) -> CompletionRelay:
        params: Dict[str, Any] = {
            "model": self.model_name,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": 0,
            "stream": stream,
        }
        if tools:
            params["tools"] = tools

        stack = AsyncExitStack()
        try:
            response = await stack.enter_async_context(
                self.client.chat.completions.with_streaming_response.create(**params)
            )
        except openai.APIStatusError as e:
            await stack.aclose()
            logger.warning(
                f"OpenAI returned {e.status_code}: {e.message}",
                extra={"status_code": e.status_code, "model": self.model_name},
            )
            raise DownstreamProviderError("openai", e.message, status_code=e.status_code)
        except openai.APIError as e:
            await stack.aclose()
            logger.error(f"OpenAI request failed: {e}", extra={"model": self.model_name})
            raise DownstreamProviderError("openai", "Completion provider unavailable")

        return CompletionRelay(
            status_code=response.status_code,
            content_type=response.headers.get("content-type", "application/json"),
            body=response.iter_bytes(),
            aclose=stack.aclose,
        )
