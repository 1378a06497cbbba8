import time
import uuid
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger, trace_span
from .interface import RateLimiterInterface, backend_unavailable
from .models import RateLimitPolicy, RateLimitResult

logger = get_logger(__name__)

# Trim the window, count, and record the attempt only if it fits.
# Returns {permitted, remaining}.
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local limit = tonumber(ARGV[3])
redis.call("zremrangebyscore", key, "-inf", now - window)
local count = redis.call("zcard", key)
if count < limit then
    redis.call("zadd", key, now, ARGV[4])
    redis.call("pexpire", key, window)
    return {1, limit - count - 1}
end
return {0, 0}
"""


class RedisSlidingWindowRateLimiter(RateLimiterInterface):
    """Redis sorted-set sliding window, evaluated atomically in one script."""

    def __init__(self):
        self.host = settings.redis_host
        self.port = settings.redis_port
        self.password = settings.redis_password
        self.db = settings.redis_db
        self._client: Optional[redis.Redis] = None

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.Redis(
                host=self.host,
                port=self.port,
                password=self.password,
                db=self.db,
                decode_responses=True,
                socket_timeout=2,
                socket_connect_timeout=2,
            )
        return self._client

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis rate limiter disconnected")

    @trace_span
    async def allow(self, identity: str, policy: RateLimitPolicy) -> RateLimitResult:
        now_ms = int(time.time() * 1000)
        member = f"{now_ms}-{uuid.uuid4().hex}"
        try:
            permitted, remaining = await self._get_client().eval(
                SLIDING_WINDOW_SCRIPT,
                1,
                policy.key(identity),
                now_ms,
                policy.window_seconds * 1000,
                policy.limit,
                member,
            )
        except (RedisError, OSError) as e:
            log = logger.warning if policy.fail_open else logger.error
            log(
                f"Rate limit backend unavailable for {policy.operation}: {e}",
                extra={
                    "operation": policy.operation,
                    "identity": identity,
                    "fail_open": policy.fail_open,
                },
            )
            return backend_unavailable(policy)

        return RateLimitResult(permitted=bool(int(permitted)), remaining=int(remaining))

    async def reset(self, identity: str, policy: RateLimitPolicy) -> None:
        try:
            await self._get_client().delete(policy.key(identity))
        except (RedisError, OSError) as e:
            logger.error(f"Error resetting rate limit for {policy.key(identity)}: {e}")
