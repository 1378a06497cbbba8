from typing import Any, Dict, Optional


class AppException(Exception):
    """Base application exception."""

    pass


class GatewayError(AppException):
    """Error that maps onto an HTTP response.

    Subclasses pin the status code and a machine-readable reason. Extra
    ``context`` is merged into the response body.
    """

    status_code: int = 500
    reason: str = "internal_error"

    def __init__(self, detail: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(detail)
        self.detail = detail
        self.context = context or {}

    def to_response_body(self) -> Dict[str, Any]:
        return {"detail": self.detail, "reason": self.reason, **self.context}


class AuthError(GatewayError):
    """Missing or invalid credential."""

    status_code = 401
    reason = "unauthorized"


class NoEntitlementError(GatewayError):
    """Caller has no active subscription."""

    status_code = 402
    reason = "payment_required"


class RateLimitError(GatewayError):
    """Sliding-window throttle rejected the call."""

    status_code = 429
    reason = "rate_limited"


class QuotaExceededError(GatewayError):
    """Monthly token allowance would be exceeded."""

    status_code = 429
    reason = "quota_exceeded"

    def __init__(self, current_usage: int, requested: int, cap: int):
        super().__init__(
            "Max month request reached",
            context={
                "values": {
                    "token_used": current_usage,
                    "requested": requested,
                    "max": cap,
                }
            },
        )
        self.current_usage = current_usage
        self.requested = requested
        self.cap = cap


class LinkLimitExceededError(GatewayError):
    """Customer already linked the maximum number of bank institutions."""

    status_code = 429
    reason = "link_limit_reached"


class NotFoundError(GatewayError):
    """Resource not found exception."""

    status_code = 404
    reason = "not_found"


class StoreError(GatewayError):
    """Entitlement persistence failed."""

    status_code = 500
    reason = "store_error"


class DownstreamProviderError(GatewayError):
    """A third-party provider returned an error.

    The provider's own status code is propagated when it has one.
    """

    reason = "provider_error"

    def __init__(
        self,
        provider: str,
        detail: str,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(detail, context={"provider": provider, **(context or {})})
        self.provider = provider
        self.status_code = status_code or 500
