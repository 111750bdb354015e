"""Startup hooks chained into an application's lifespan."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from fastapi_htmlkit import __version__
from fastapi_htmlkit.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def install_startup_hook(app: FastAPI, hook: Callable[[FastAPI], None]) -> None:
    """Run ``hook`` before the application's existing lifespan starts.

    An exception raised by the hook aborts startup: the server never begins
    accepting connections.
    """
    wrapped = app.router.lifespan_context

    @asynccontextmanager
    async def lifespan(lifespan_app: Any) -> AsyncIterator[Any]:
        log_with_context(
            logger,
            "info",
            "Running view provider startup hook",
            version=__version__,
            event_type="htmlkit_startup",
        )
        try:
            hook(app)
        except Exception as e:
            log_with_context(
                logger,
                "error",
                "View provider startup failed",
                error=str(e),
                error_type=type(e).__name__,
                event_type="htmlkit_startup_failed",
            )
            raise

        async with wrapped(lifespan_app) as state:
            yield state

    app.router.lifespan_context = lifespan
