"""
Repository layer: measurement and conversation stores.

Each store has an in-memory and a SQLite backend behind the same contract.
"""
from health_chat.repositories.base import Database
from health_chat.repositories.metric_repository import (
    MetricStore,
    InMemoryMetricStore,
    SqliteMetricStore,
)
from health_chat.repositories.conversation_repository import (
    ConversationStore,
    InMemoryConversationStore,
    SqliteConversationStore,
)

__all__ = [
    "Database",
    "MetricStore",
    "InMemoryMetricStore",
    "SqliteMetricStore",
    "ConversationStore",
    "InMemoryConversationStore",
    "SqliteConversationStore",
]
