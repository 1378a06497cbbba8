import asyncio
import time
from collections import deque
from typing import Callable, Deque, Dict

from .interface import RateLimiterInterface
from .models import RateLimitPolicy, RateLimitResult
from common.core.otel_axiom_exporter import get_logger

logger = get_logger(__name__)


class MemorySlidingWindowRateLimiter(RateLimiterInterface):
    """In-process sliding window. Per-process only, for tests and local runs."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._windows: Dict[str, Deque[float]] = {}
        self._lock = asyncio.Lock()
        logger.info("Memory rate limiter initialized")

    async def allow(self, identity: str, policy: RateLimitPolicy) -> RateLimitResult:
        key = policy.key(identity)
        async with self._lock:
            now = self._clock()
            window = self._windows.setdefault(key, deque())
            while window and window[0] <= now - policy.window_seconds:
                window.popleft()

            if len(window) >= policy.limit:
                return RateLimitResult(permitted=False, remaining=0)

            window.append(now)
            return RateLimitResult(
                permitted=True, remaining=policy.limit - len(window)
            )

    async def reset(self, identity: str, policy: RateLimitPolicy) -> None:
        async with self._lock:
            self._windows.pop(policy.key(identity), None)
