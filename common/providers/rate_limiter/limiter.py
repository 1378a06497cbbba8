"""Global per-IP rate limiter instance for SlowAPI."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from common.core.config import settings

# Coarse per-IP flood protection shared across API pods through Redis.
# Both limits must hold. Per-operation limits live in the usage gate.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["10/second", "300/minute"],
    storage_uri=settings.redis_connection_url,
)
