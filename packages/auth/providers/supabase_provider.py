from typing import Any, Dict

import jwt
from pydantic import ValidationError

from common.core.config import settings
from common.core.exceptions import AuthError
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.models.domain.verified_identity import VerifiedIdentity
from packages.auth.providers.interface import IdentityVerifierInterface
from packages.auth.providers.models import IdentityProvider, SupabaseTokenClaims

logger = get_logger(__name__)


class SupabaseJWTProvider(IdentityVerifierInterface):
    """Verifies Supabase-issued access tokens locally with the project JWT secret"""

    def __init__(self, jwt_secret: str = None, audience: str = None):
        self.jwt_secret = jwt_secret or settings.supabase_jwt_secret
        self.audience = audience or settings.supabase_jwt_audience
        if not self.jwt_secret:
            raise ValueError(
                "Supabase configuration missing: supabase_jwt_secret required in settings"
            )

    @trace_span
    async def verify(self, credential: str) -> VerifiedIdentity:
        claims = self._claims(self._decode(credential))
        return VerifiedIdentity(account_id=claims.sub, email=claims.email)

    def get_provider_name(self) -> IdentityProvider:
        return IdentityProvider.SUPABASE

    def _decode(self, credential: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                credential,
                self.jwt_secret,
                algorithms=["HS256"],
                audience=self.audience,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected access token: {e}")
            raise AuthError("Invalid access token")

    def _claims(self, payload: Dict[str, Any]) -> SupabaseTokenClaims:
        try:
            return SupabaseTokenClaims.model_validate(payload)
        except ValidationError:
            raise AuthError("Access token is missing required claims")
