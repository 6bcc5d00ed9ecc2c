"""
FastAPI dependency injection for the Health Chat Service.

The stores are built once by the application lifespan (create_stores) and
kept on app.state; request handlers receive them through Depends(). Services
are cheap and built per request around those shared stores.

Architecture Flow:
    lifespan ─▶ create_stores() ─▶ app.state.metric_store / conversation_store
    API Layer (Routers)
         ↓ Depends()
    Service Layer (MeasurementService, ChatService, InsightsService)
         ↓ Depends()
    Stores (in-memory or SQLite)

Testing:
    app.dependency_overrides[get_metric_store] = lambda: InMemoryMetricStore()
"""
import logging
from typing import Tuple

from fastapi import Depends, Request

from health_chat.core.config import Settings, settings
from health_chat.repositories import (
    ConversationStore,
    Database,
    InMemoryConversationStore,
    InMemoryMetricStore,
    MetricStore,
    SqliteConversationStore,
    SqliteMetricStore,
)
from health_chat.services import (
    ChatService,
    InsightsService,
    MeasurementService,
    ResponseComposer,
)

logger = logging.getLogger(__name__)


def create_stores(config: Settings = settings) -> Tuple[MetricStore, ConversationStore]:
    """
    Build the measurement and conversation stores for the configured backend.

    Both SQLite stores share one Database (one file).
    """
    if config.health_chat_storage_backend == "sqlite":
        logger.info(f"Initializing database: {config.database_path}")
        db = Database(
            db_path=config.database_path,
            busy_timeout=config.health_chat_db_busy_timeout
        )
        stores = (SqliteMetricStore(db=db), SqliteConversationStore(db=db))
    else:
        stores = (InMemoryMetricStore(), InMemoryConversationStore())

    logger.info(
        "Stores created",
        extra={"backend": config.health_chat_storage_backend}
    )
    return stores


def get_metric_store(request: Request) -> MetricStore:
    """Get the measurement store created at startup."""
    return request.app.state.metric_store


def get_conversation_store(request: Request) -> ConversationStore:
    """Get the conversation store created at startup."""
    return request.app.state.conversation_store


def get_measurement_service(
    metric_store: MetricStore = Depends(get_metric_store)
) -> MeasurementService:
    return MeasurementService(metric_store=metric_store)


def get_chat_service(
    metric_store: MetricStore = Depends(get_metric_store),
    conversation_store: ConversationStore = Depends(get_conversation_store)
) -> ChatService:
    """
    Get a ChatService wired to both stores and the default composer.

    The reply includes the last HEALTH_CHAT_HISTORY_LIMIT turns.
    """
    return ChatService(
        metric_store=metric_store,
        conversation_store=conversation_store,
        composer=ResponseComposer(),
        history_limit=settings.health_chat_history_limit
    )


def get_insights_service(
    metric_store: MetricStore = Depends(get_metric_store)
) -> InsightsService:
    return InsightsService(metric_store=metric_store)
