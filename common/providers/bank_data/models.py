from typing import Optional
from pydantic import BaseModel


class LinkTokenRequest(BaseModel):
    client_user_id: str
    language: str = "en"
    country_code: str = "US"
    # Present when re-linking an existing item (update mode)
    access_token: Optional[str] = None


class ExchangedItem(BaseModel):
    item_id: str
    access_token: str


class Institution(BaseModel):
    institution_id: str
    name: str
