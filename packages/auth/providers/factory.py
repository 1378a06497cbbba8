"""Factory for creating singleton identity verifier instances."""

from typing import Dict, Optional
from packages.auth.providers.interface import IdentityVerifierInterface
from packages.auth.providers.models import IdentityProvider
from packages.auth.providers.supabase_provider import SupabaseJWTProvider


class IdentityVerifierFactory:
    """Factory for creating and managing identity verifier singletons."""

    _instances: Dict[IdentityProvider, IdentityVerifierInterface] = {}

    @classmethod
    def get_provider(cls, provider: IdentityProvider) -> IdentityVerifierInterface:
        """Get or create a singleton instance of the specified verifier.

        Raises:
            ValueError: If the provider is not supported
        """
        if provider not in cls._instances:
            cls._instances[provider] = cls._create_provider(provider)

        return cls._instances[provider]

    @classmethod
    def _create_provider(cls, provider: IdentityProvider) -> IdentityVerifierInterface:
        if provider == IdentityProvider.SUPABASE:
            return SupabaseJWTProvider()
        raise ValueError(f"Unsupported identity provider: {provider}. Supported: SUPABASE.")

    @classmethod
    def clear_cache(cls, provider: Optional[IdentityProvider] = None):
        if provider:
            cls._instances.pop(provider, None)
        else:
            cls._instances.clear()


def get_identity_verifier() -> IdentityVerifierInterface:
    """Convenience function to get the configured identity verifier."""
    return IdentityVerifierFactory.get_provider(IdentityProvider.SUPABASE)
