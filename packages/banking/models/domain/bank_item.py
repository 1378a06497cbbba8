from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class BankItem(BaseModel):
    id: int
    item_id: str
    customer_id: str
    institution_id: str
    institution_name: Optional[str] = None
    access_token: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BankItemUpsertModel(BaseModel):
    item_id: str
    customer_id: str
    institution_id: str
    institution_name: Optional[str] = None
    access_token: str
