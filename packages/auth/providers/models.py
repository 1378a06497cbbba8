from typing import List, Optional, Union
from enum import Enum
from pydantic import BaseModel


class IdentityProvider(str, Enum):
    """Supported identity providers"""

    SUPABASE = "supabase"


class SupabaseTokenClaims(BaseModel):
    """Supabase access token claims"""

    sub: str  # Subject (account id)
    aud: Union[str, List[str]]
    exp: int
    iat: Optional[int] = None
    email: Optional[str] = None
    role: Optional[str] = None
