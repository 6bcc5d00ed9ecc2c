"""
Service layer: the conversational engine and the services that orchestrate it.

Engine pieces (pure, no store access):
- intent_matcher: match_intent, Intent, IntentKind
- response_composer: ResponseComposer
- insights_engine: compute_insights, compute_trend, parse_numeric
"""
from health_chat.services.chat_service import ChatReply, ChatService
from health_chat.services.insights_service import InsightsService
from health_chat.services.measurement_service import MeasurementService
from health_chat.services.response_composer import ResponseComposer

__all__ = [
    "ChatReply",
    "ChatService",
    "InsightsService",
    "MeasurementService",
    "ResponseComposer",
]
