from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .models import CompletionRelay


class ChatCompletionProviderInterface(ABC):
    """Interface for chat completion providers whose output is relayed verbatim."""

    @abstractmethod
    async def open_completion(
        self,
        messages: List[Dict[str, Any]],
        tools: Optional[List[Dict[str, Any]]] = None,
        stream: bool = False,
    ) -> CompletionRelay:
        """
        Send a completion request and return the open upstream response.

        Raises:
            DownstreamProviderError: If the provider rejects the request or
                cannot be reached
        """
        pass
