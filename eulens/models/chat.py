"""Chat request and response models."""

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Source(BaseModel):
    """A retrieved document cited in an answer."""

    name: str
    url: str
    relevance: float


class ChatRequest(BaseModel):
    """Chat request body."""

    message: str


class ChatResponse(BaseModel):
    """Answer to a chat request with the sources it was grounded on."""

    response: str
    sources: List[Source] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Body returned when a chat request fails."""

    error: str


class ChatMessage(BaseModel):
    """One turn of a chat session. Kept in session memory only."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc))
    sources: Optional[List[Source]] = None

    @classmethod
    def from_response(cls, response: ChatResponse) -> "ChatMessage":
        """Build the assistant turn for a chat response."""
        return cls(role="assistant", content=response.response, sources=response.sources)
