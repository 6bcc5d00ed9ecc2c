"""
Domain models for the health chat service.
"""
from health_chat.models.measurement import MeasurementRecord, MetricValue
from health_chat.models.conversation import ConversationTurn, ROLE_ASSISTANT, ROLE_USER

__all__ = [
    "MeasurementRecord",
    "MetricValue",
    "ConversationTurn",
    "ROLE_USER",
    "ROLE_ASSISTANT",
]
