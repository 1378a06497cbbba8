from typing import Optional

from .interface import ChatCompletionProviderInterface
from .openai_provider import OpenAIChatCompletionProvider

_chat_provider: Optional[ChatCompletionProviderInterface] = None


def get_chat_completion_provider() -> ChatCompletionProviderInterface:
    """Get the chat completion provider, sharing one HTTP client per process."""
    global _chat_provider

    if _chat_provider is None:
        _chat_provider = OpenAIChatCompletionProvider()

    return _chat_provider
