from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable


@dataclass
class CompletionRelay:
    """An open upstream completion response, relayed to the caller as-is.

    ``body`` yields the raw upstream bytes (a JSON document, or SSE chunks
    when streaming). ``aclose`` must run once the body has been sent.
    """

    status_code: int
    content_type: str
    body: AsyncIterator[bytes]
    aclose: Callable[[], Awaitable[None]]
