from abc import ABC, abstractmethod

from .models import RateLimitPolicy, RateLimitResult


class RateLimiterInterface(ABC):
    """Sliding-window request throttle keyed by caller identity."""

    @abstractmethod
    async def allow(self, identity: str, policy: RateLimitPolicy) -> RateLimitResult:
        """Record an attempt and report whether it fits in the window.

        Denied attempts are not recorded. Backend failures resolve through
        ``policy.fail_open`` and never raise.
        """
        pass

    @abstractmethod
    async def reset(self, identity: str, policy: RateLimitPolicy) -> None:
        """Forget every recorded attempt for one identity and operation."""
        pass


def backend_unavailable(policy: RateLimitPolicy) -> RateLimitResult:
    """Outcome when the window store cannot be consulted."""
    return RateLimitResult(
        permitted=policy.fail_open,
        remaining=policy.limit if policy.fail_open else 0,
        backend_available=False,
    )
