"""
Exception classes and FastAPI error handlers for the Health Chat Service.

The conversational engine is total over validated input: unknown users and
sessions resolve to empty collections and degenerate trend computations are
omitted rather than raised. The exceptions here cover infrastructure faults
only (storage and configuration).

Usage:
    from health_chat.core.exceptions import StorageError

    raise StorageError(operation="append_exchange")

    # In the app factory
    setup_exception_handlers(app)
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HealthChatError(Exception):
    """
    Base exception for all Health Chat Service errors.

    Carries an HTTP status code and a human-readable detail message;
    extra keyword arguments are kept as context for the error response.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result: Dict[str, Any] = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


class StorageError(HealthChatError):
    """Raised when a store cannot complete a read or write."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Storage operation failed"

    def __init__(self, operation: Optional[str] = None, **kwargs: Any):
        detail = f"Storage error during {operation}" if operation else self.detail
        super().__init__(detail=detail, operation=operation, **kwargs)


class ConfigurationError(HealthChatError):
    """Raised when bundled data files (metric registry, responses) are invalid."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Service configuration is invalid"


async def health_chat_exception_handler(
    request: Request,
    exc: HealthChatError
) -> JSONResponse:
    """Log the error and return its JSON representation."""
    logger.warning(
        f"HealthChatError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""
    app.add_exception_handler(HealthChatError, health_chat_exception_handler)
