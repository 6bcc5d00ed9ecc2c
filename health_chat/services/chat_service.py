"""
Service layer for chat exchanges.

A chat turn reads the user's measurements, classifies the message,
composes a reply and stores the (message, reply) pair:

    text ─▶ match_intent ─▶ ResponseComposer ─▶ ConversationStore
              ▲
    MetricStore.list_all(user)
"""
import logging
from dataclasses import dataclass
from typing import List

from health_chat.models import ConversationTurn
from health_chat.repositories import ConversationStore, MetricStore
from health_chat.services.intent_matcher import match_intent
from health_chat.services.response_composer import ResponseComposer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatReply:
    reply: str
    conversation: List[ConversationTurn]


class ChatService:
    """
    Answers chat messages using the user's stored measurements.

    Args:
        metric_store: Source of the user's measurements
        conversation_store: Where exchanges are appended
        composer: Renders intents as reply text
        history_limit: Number of recent turns returned with each reply
    """

    def __init__(
        self,
        metric_store: MetricStore,
        conversation_store: ConversationStore,
        composer: ResponseComposer,
        history_limit: int = 10
    ):
        self._metrics = metric_store
        self._conversations = conversation_store
        self._composer = composer
        self._history_limit = history_limit

    def chat(self, user_key: str, session_key: str, text: str) -> ChatReply:
        """
        Reply to a message and store the exchange.

        Returns:
            ChatReply: The reply text and the session's most recent turns,
                the new exchange included.
        """
        records = self._metrics.list_all(user_key)
        intent = match_intent(text, records)
        reply = self._composer.compose(intent)

        self._conversations.append_exchange(session_key, text, reply)
        logger.info(
            "Chat exchange stored",
            extra={"user_id": user_key, "session_id": session_key, "intent": intent.kind.value}
        )

        return ChatReply(
            reply=reply,
            conversation=self._conversations.recent(session_key, self._history_limit),
        )

    def history(self, session_key: str) -> List[ConversationTurn]:
        """Return the full transcript of a session (empty for unknown sessions)."""
        return self._conversations.history(session_key)
