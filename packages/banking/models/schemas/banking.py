from typing import Any, Dict, Optional
from pydantic import BaseModel


class LinkTokenCreateRequest(BaseModel):
    # Set to re-link an institution that is already connected
    institution_id: Optional[str] = None


class LinkTokenCreateResponse(BaseModel):
    link_token: str
    access_token: Optional[str] = None


class PublicTokenExchangeRequest(BaseModel):
    public_token: str


class PublicTokenExchangeResponse(BaseModel):
    institution_id: str
    institution_name: str


class TransactionsSyncRequest(BaseModel):
    institution_id: str
    cursor: Optional[str] = None


class TransactionsSyncResponse(BaseModel):
    data: Dict[str, Any]


class RemoveItemRequest(BaseModel):
    institution_id: str
