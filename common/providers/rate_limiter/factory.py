from typing import Optional

from common.core.config import settings
from common.core.constants import RateLimiterBackend
from common.core.otel_axiom_exporter import get_logger

from .interface import RateLimiterInterface
from .memory_rate_limiter import MemorySlidingWindowRateLimiter
from .redis_rate_limiter import RedisSlidingWindowRateLimiter

logger = get_logger(__name__)

# Global instance
_rate_limiter: Optional[RateLimiterInterface] = None


def get_rate_limiter() -> RateLimiterInterface:
    """
    Get the configured per-identity rate limiter.

    Returns:
        RateLimiterInterface: The rate limiter instance
    """
    global _rate_limiter

    if _rate_limiter is None:
        if settings.rate_limiter_backend == RateLimiterBackend.MEMORY:
            _rate_limiter = MemorySlidingWindowRateLimiter()
        else:
            _rate_limiter = RedisSlidingWindowRateLimiter()
        logger.info(
            f"Initialized {settings.rate_limiter_backend.value} rate limiter provider"
        )

    return _rate_limiter


async def close_rate_limiter() -> None:
    """Release the Redis connection held by the global limiter, if any."""
    global _rate_limiter

    if isinstance(_rate_limiter, RedisSlidingWindowRateLimiter):
        await _rate_limiter.disconnect()
    _rate_limiter = None
