from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Account(BaseModel):
    id: int
    account_id: str
    email: Optional[str] = None
    customer_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AccountCreateModel(BaseModel):
    account_id: str
    email: Optional[str] = None
    customer_id: Optional[str] = None
