from abc import ABC, abstractmethod

from packages.auth.models.domain.verified_identity import VerifiedIdentity
from packages.auth.providers.models import IdentityProvider


class IdentityVerifierInterface(ABC):
    """Interface for identity verifiers"""

    @abstractmethod
    async def verify(self, credential: str) -> VerifiedIdentity:
        """Resolve a bearer credential to an identity.

        Raises:
            AuthError: If the credential is invalid, expired or malformed
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> IdentityProvider:
        """Get the provider name"""
        pass
