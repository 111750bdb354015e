"""Exception handlers for rendering errors."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fastapi_htmlkit.exceptions import HTMLKitException
from fastapi_htmlkit.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


async def htmlkit_exception_handler(request: Request, exc: HTMLKitException) -> JSONResponse:
    """Turn rendering exceptions into structured JSON error responses.

    The response carries the error code, the identifier of the error kind,
    the reason and optional details.
    """
    log_with_context(
        logger,
        "warning",
        "View rendering error",
        error_code=exc.code.value,
        error_identifier=exc.identifier,
        error_reason=exc.reason,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="htmlkit_error",
    )

    error_content: dict[str, Any] = {
        "code": exc.code.value,
        "identifier": exc.identifier,
        "message": exc.reason,
        "details": exc.details,
    }

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the rendering exception handler with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(HTMLKitException, htmlkit_exception_handler)
