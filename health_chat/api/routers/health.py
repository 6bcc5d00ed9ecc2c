"""
Liveness, readiness and service banner endpoints.

- /health: Liveness probe (is the app running?)
- /ready: Readiness probe (can the stores be reached?)
- /api/health: Banner kept for the web client's connectivity check

No authentication, no request body.
"""
import logging
import time
from typing import Callable, List

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from health_chat import __version__
from health_chat.core.datetime_utils import utc_now
from health_chat.core.dependencies import get_conversation_store, get_metric_store
from health_chat.core.exceptions import StorageError
from health_chat.repositories import ConversationStore, MetricStore
from health_chat.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health & Observability"])

BANNER = "Health Measures Chatbot API is running!"


class HealthResponse(BaseModel):
    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


class DependencyStatus(BaseModel):
    name: str
    status: str  # "ok" or "unavailable"
    latency_ms: float
    message: str | None = None


class ReadyResponse(BaseModel):
    status: str  # "ready" or "not_ready"
    dependencies: List[DependencyStatus]
    timestamp: str


def _timestamp() -> str:
    return utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")


def _check(name: str, ping: Callable[[], None]) -> DependencyStatus:
    start = time.perf_counter()
    try:
        ping()
    except StorageError as e:
        logger.error(f"{name} readiness check failed", extra={"error": str(e.__cause__ or e)})
        return DependencyStatus(
            name=name,
            status="unavailable",
            latency_ms=round((time.perf_counter() - start) * 1000, 2),
            message=e.detail,
        )
    return DependencyStatus(
        name=name,
        status="ok",
        latency_ms=round((time.perf_counter() - start) * 1000, 2),
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns immediately without touching the stores."
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=__version__, timestamp=_timestamp())


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="Checks that the measurement and conversation stores are reachable. "
                "Returns 503 if any of them is not."
)
async def readiness_check(
    response: Response,
    metric_store: MetricStore = Depends(get_metric_store),
    conversation_store: ConversationStore = Depends(get_conversation_store)
) -> ReadyResponse:
    dependencies = [
        _check("metric_store", metric_store.ping),
        _check("conversation_store", conversation_store.ping),
    ]
    ready = all(dep.status == "ok" for dep in dependencies)
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadyResponse(
        status="ready" if ready else "not_ready",
        dependencies=dependencies,
        timestamp=_timestamp(),
    )


@router.get(
    "/api/health",
    response_model=MessageResponse,
    summary="Service banner"
)
async def api_banner() -> MessageResponse:
    return MessageResponse(message=BANNER)
