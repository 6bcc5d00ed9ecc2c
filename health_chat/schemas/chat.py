"""
Pydantic schemas for chat API operations.
"""
from datetime import datetime
from typing import List, Literal

from pydantic import Field

from health_chat.schemas.base import CamelModel


class ChatRequest(CamelModel):
    """A message for the health assistant."""
    message: str = Field(..., min_length=1, max_length=2000, examples=["What's my latest weight?"])
    session_id: str = Field("default", min_length=1, max_length=200)
    user_id: str = Field("default", min_length=1, max_length=200)


class ConversationTurnResponse(CamelModel):
    role: Literal["user", "assistant"]
    text: str
    timestamp: datetime


class ChatResponse(CamelModel):
    """Assistant reply plus the most recent turns of the session."""
    response: str
    session_id: str
    conversation: List[ConversationTurnResponse]
