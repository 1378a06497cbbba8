from pydantic import BaseModel, Field


class ReceiptSearchRequest(BaseModel):
    merchant: str = Field(min_length=1)
    region: str = ""

    @property
    def text_query(self) -> str:
        return " ".join(part for part in (self.merchant.strip(), self.region.strip()) if part)
