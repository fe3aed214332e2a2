"""Chat domain schemas"""

from typing import Literal

from pydantic import BaseModel, Field

ChatSource = Literal["package", "faq", "llm", "error"]


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=4000)


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=1000)
    history: list[ChatMessage] = Field(default_factory=list)


class ChatResponse(BaseModel):
    message: str
    source: ChatSource
