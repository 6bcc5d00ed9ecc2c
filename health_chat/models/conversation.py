"""
Domain model for conversation turns.
"""
from dataclasses import dataclass
from datetime import datetime

from health_chat.core.datetime_utils import from_db_string

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationTurn:
    """One message in a chat session, written by the user or the assistant."""

    role: str
    text: str
    timestamp: datetime

    @classmethod
    def from_row(cls, row: tuple) -> 'ConversationTurn':
        """Create a turn from a (role, text, timestamp) database row."""
        return cls(role=row[0], text=row[1], timestamp=from_db_string(row[2]))
