"""
Pydantic schemas for API request/response validation.
"""
from health_chat.schemas.measurement import (
    MeasurementCreate,
    MeasurementResponse,
    MeasurementCreatedResponse,
)
from health_chat.schemas.chat import (
    ChatRequest,
    ChatResponse,
    ConversationTurnResponse,
)
from health_chat.schemas.insights import (
    InsightsResponse,
    MessageResponse,
    TrendSummaryResponse,
)
from health_chat.schemas.meta import MetricDefinitionResponse, MetricsListResponse

__all__ = [
    "MeasurementCreate",
    "MeasurementResponse",
    "MeasurementCreatedResponse",
    "ChatRequest",
    "ChatResponse",
    "ConversationTurnResponse",
    "InsightsResponse",
    "MessageResponse",
    "TrendSummaryResponse",
    "MetricDefinitionResponse",
    "MetricsListResponse",
]
