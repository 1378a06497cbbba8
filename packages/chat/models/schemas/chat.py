from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["user", "system", "assistant", "function", "tool"]
    content: str = ""
    name: Optional[str] = None
    # Client-side bookkeeping of tool arguments; never sent upstream
    args: Optional[Any] = None

    def to_upstream(self) -> dict:
        return self.model_dump(exclude_none=True, exclude={"args"})


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    db_schema: str = Field(default="", alias="schema")
    version: str = "1"
    stream: bool = False
    use_tools: bool = Field(default=False, alias="useTools")
    messages: List[ChatMessage] = Field(min_length=1)
