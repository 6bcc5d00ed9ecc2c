"""
FastAPI application entry point for the Health Chat Service.

Architecture Overview:
    ┌─────────────────────────────────────────────────────────────┐
    │                     FastAPI Application                     │
    ├─────────────────────────────────────────────────────────────┤
    │  Middleware: LoggingMiddleware → CORSMiddleware             │
    ├─────────────────────────────────────────────────────────────┤
    │  Routers (api/routers/)                                     │
    │    ├── health.py        - /health, /ready, /api/health      │
    │    ├── measurements.py  - /api/health/data                  │
    │    ├── insights.py      - /api/health/insights              │
    │    ├── meta.py          - /api/health/metrics               │
    │    └── chat.py          - /api/chat                         │
    ├─────────────────────────────────────────────────────────────┤
    │  Services (services/)          ← Injected via Depends()     │
    │    ├── MeasurementService                                   │
    │    ├── ChatService  → match_intent → ResponseComposer       │
    │    └── InsightsService → compute_insights                   │
    ├─────────────────────────────────────────────────────────────┤
    │  Stores (repositories/)   ← Built by lifespan, on app.state │
    │    ├── MetricStore        (memory | sqlite)                 │
    │    └── ConversationStore  (memory | sqlite)                 │
    └─────────────────────────────────────────────────────────────┘

Run with:
    python -m health_chat.main
    uvicorn health_chat.main:app
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from health_chat import __version__
from health_chat.api.routers import (
    chat_router,
    health_router,
    insights_router,
    measurements_router,
    meta_router,
)
from health_chat.core.config import API_HOST, API_PORT, API_RELOAD, settings
from health_chat.core.dependencies import create_stores
from health_chat.core.exceptions import setup_exception_handlers
from health_chat.core.logging_config import setup_logging
from health_chat.core.metric_registry import list_metrics
from health_chat.core.response_catalog import get_catalog
from health_chat.core.middleware import LoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        - Configures structured logging
        - Loads the metric registry and response catalog (fails fast on bad YAML)
        - Creates the stores for the configured backend and keeps them on app.state
    """
    setup_logging(level="INFO", json_format=True)

    logger = logging.getLogger(__name__)
    logger.info("Starting Health Chat Service...")

    list_metrics()
    get_catalog()
    app.state.metric_store, app.state.conversation_store = create_stores()

    yield

    logger.info("Health Chat Service shutting down...")


def create_app() -> FastAPI:
    """Build the application with middleware, handlers and routers."""
    app = FastAPI(
        title="Health Chat Service",
        description="Log health measurements, chat with a rule-based health assistant "
                    "and get per-metric trend insights.",
        version=__version__,
        lifespan=lifespan
    )

    setup_exception_handlers(app)

    # Middleware runs in reverse registration order: logging wraps CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.include_router(health_router)
    app.include_router(measurements_router)
    app.include_router(insights_router)
    app.include_router(meta_router)
    app.include_router(chat_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "health_chat.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD
    )
