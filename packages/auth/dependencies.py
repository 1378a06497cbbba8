from typing import Annotated, Optional
from fastapi import Header


async def get_bearer_credential(
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """Raw bearer credential from the Authorization header, if present.

    Verification happens in the usage gate so that a missing credential and
    a bad one reject at the same stage.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
