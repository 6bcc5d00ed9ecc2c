"""
Request logging middleware.

Gives every request a short request id (propagated to all log lines via
logging_config.request_id_var and returned in the X-Request-ID header) and
logs start and completion with the request duration.
"""
import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from health_chat.core.logging_config import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log request start/completion with a per-request id.

    Log Output (JSON):
    {
        "message": "Request completed",
        "request_id": "abc12345",
        "extra": {"method": "POST", "path": "/api/chat", "status_code": 200, "duration_ms": 3.1}
    }
    """

    # Probe and docs endpoints are not logged
    EXCLUDED_PATHS = {"/health", "/ready", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        set_request_id(request_id)

        method = request.method
        path = request.url.path
        log_request = path not in self.EXCLUDED_PATHS
        start_time = time.perf_counter()

        if log_request:
            logger.info("Request started", extra={"method": method, "path": path})

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed with exception",
                extra={"method": method, "path": path, "error": str(e)}
            )
            clear_request_id()
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if log_request:
            log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
            logger.log(
                log_level,
                "Request completed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            )
        clear_request_id()

        response.headers["X-Request-ID"] = request_id
        return response
