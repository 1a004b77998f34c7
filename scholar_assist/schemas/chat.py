from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str = ""


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list, description="Full conversation, oldest first.")


class ChatResponse(BaseModel):
    content: str = Field(..., description="Assistant reply text.")


class CompletionStatusResponse(BaseModel):
    success: bool
    message: str
    has_key: bool
    key_length: int = 0
    model: str | None = None
    test_response: str | None = None
    error: str | None = None
