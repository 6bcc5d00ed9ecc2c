"""
Conversation stores: per-session, append-only chat transcripts.

Turns are always written in user/assistant pairs. A pair is appended
atomically, so readers see either both turns of an exchange or neither.
"""
import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from health_chat.core.datetime_utils import to_db_string, utc_now
from health_chat.core.exceptions import StorageError
from health_chat.models import ConversationTurn, ROLE_ASSISTANT, ROLE_USER
from health_chat.repositories.base import Database

logger = logging.getLogger(__name__)


class ConversationStore(ABC):
    """Contract shared by all conversation store backends."""

    @abstractmethod
    def append_exchange(self, session_key: str, user_text: str, assistant_text: str) -> None:
        """Append the user turn followed by the assistant turn as one unit."""

    @abstractmethod
    def recent(self, session_key: str, limit: int) -> List[ConversationTurn]:
        """Return the last `limit` turns of the session, oldest first."""

    @abstractmethod
    def history(self, session_key: str) -> List[ConversationTurn]:
        """Return every turn of the session, oldest first."""

    def ping(self) -> None:
        """Raise StorageError if the backend cannot be reached."""

    @staticmethod
    def _build_exchange(user_text: str, assistant_text: str) -> Tuple[ConversationTurn, ConversationTurn]:
        user_turn = ConversationTurn(role=ROLE_USER, text=user_text, timestamp=utc_now())
        assistant_turn = ConversationTurn(role=ROLE_ASSISTANT, text=assistant_text, timestamp=utc_now())
        return user_turn, assistant_turn


class InMemoryConversationStore(ConversationStore):
    """Process-lifetime store; contents are lost on restart."""

    def __init__(self):
        self._turns: Dict[str, List[ConversationTurn]] = {}
        self._lock = threading.Lock()

    def append_exchange(self, session_key, user_text, assistant_text):
        turns = self._build_exchange(user_text, assistant_text)
        with self._lock:
            self._turns.setdefault(session_key, []).extend(turns)

    def recent(self, session_key, limit):
        if limit <= 0:
            return []
        with self._lock:
            return list(self._turns.get(session_key, ())[-limit:])

    def history(self, session_key):
        with self._lock:
            return list(self._turns.get(session_key, ()))


class SqliteConversationStore(ConversationStore):
    """
    Durable store backed by the `conversation_turns` table.

    It should be instantiated via core.dependencies.get_conversation_store().
    """

    def __init__(self, db: Database):
        self._db = db

    def ping(self):
        self._db.ping()

    def append_exchange(self, session_key, user_text, assistant_text):
        turns = self._build_exchange(user_text, assistant_text)
        conn = self._db.get_connection()
        try:
            # Both rows commit in one transaction
            with conn:
                conn.executemany("""
                    INSERT INTO conversation_turns (session_key, role, text, timestamp)
                    VALUES (?, ?, ?, ?)
                """, [
                    (session_key, turn.role, turn.text, to_db_string(turn.timestamp))
                    for turn in turns
                ])
        except sqlite3.Error as e:
            logger.error(f"Error saving chat exchange: {e}", exc_info=True)
            raise StorageError(operation="append_exchange") from e
        finally:
            conn.close()

    def recent(self, session_key, limit):
        if limit <= 0:
            return []
        rows = self._fetch("""
            SELECT role, text, timestamp FROM (
                SELECT seq, role, text, timestamp
                FROM conversation_turns
                WHERE session_key = ?
                ORDER BY seq DESC
                LIMIT ?
            ) ORDER BY seq ASC
        """, (session_key, limit), operation="recent_turns")
        return [ConversationTurn.from_row(row) for row in rows]

    def history(self, session_key):
        rows = self._fetch("""
            SELECT role, text, timestamp
            FROM conversation_turns
            WHERE session_key = ?
            ORDER BY seq ASC
        """, (session_key,), operation="conversation_history")
        return [ConversationTurn.from_row(row) for row in rows]

    def _fetch(self, query: str, params: tuple, operation: str) -> list:
        conn = self._db.get_connection()
        try:
            return conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Error reading conversation turns: {e}", exc_info=True)
            raise StorageError(operation=operation) from e
        finally:
            conn.close()
