"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from health_chat.api.routers.health import router as health_router
from health_chat.api.routers.measurements import router as measurements_router
from health_chat.api.routers.insights import router as insights_router
from health_chat.api.routers.chat import router as chat_router
from health_chat.api.routers.meta import router as meta_router

__all__ = [
    "health_router",
    "measurements_router",
    "insights_router",
    "chat_router",
    "meta_router",
]
