from packages.auth.models.domain.verified_identity import VerifiedIdentity

__all__ = [
    "VerifiedIdentity",
]
