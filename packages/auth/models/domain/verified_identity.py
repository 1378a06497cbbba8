from typing import Optional
from pydantic import BaseModel


class VerifiedIdentity(BaseModel):
    """Caller identity resolved from a verified credential"""

    account_id: str
    email: Optional[str] = None
