from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitPolicy:
    """At most ``limit`` calls per identity in any trailing ``window_seconds``.

    ``fail_open`` decides what happens when the window store is unreachable:
    admit (and log) or deny.
    """

    operation: str
    limit: int
    window_seconds: int
    fail_open: bool = False

    def key(self, identity: str) -> str:
        return f"ratelimit:{self.operation}:{identity}"


@dataclass(frozen=True)
class RateLimitResult:
    permitted: bool
    remaining: int
    backend_available: bool = True
