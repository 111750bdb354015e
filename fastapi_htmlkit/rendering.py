"""Render view instances for a request, registering them on first use.

A miss in the renderer registers the instance and retries exactly once. Any
other failure, including a second miss, reaches the caller unchanged.
Concurrent first renders of one view type each register it; the last
registration wins.
"""

from typing import Any

from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from fastapi_htmlkit.dependencies import get_provider
from fastapi_htmlkit.logging_config import get_logger, log_with_context
from fastapi_htmlkit.renderer import NO_CONTEXT, NotFound
from fastapi_htmlkit.responses import View, make_response, make_view
from fastapi_htmlkit.views import BaseView

logger = get_logger(__name__)


def render_html_for(request: Request, view: BaseView, context: Any = NO_CONTEXT, locale: str | None = None) -> str:
    """Render ``view`` through the request's provider to an HTML string.

    Args:
        request: The FastAPI request object
        view: Page or Template instance; registered if its type is unknown
        context: Context for a Template, omitted for a Page
        locale: Locale for the ``t`` template function, default locale if None

    Returns:
        Rendered HTML

    Raises:
        FormulaNotFoundError: If registration did not take effect
        RegistrationError: If the view cannot be compiled
        EvaluationError: If rendering fails
    """
    provider = get_provider(request)
    renderer = provider.renderer
    view_type = type(view)

    result = renderer.lookup(view_type)
    if isinstance(result, NotFound):
        log_with_context(
            logger,
            "debug",
            "Registering view on first render",
            view_id=result.view_id,
            event_type="formula_auto_registered",
        )
        provider.add(view)
        return renderer.render_raw(view_type, context, locale)

    return renderer.evaluate(result.formula, context, locale)


def render_for(request: Request, view: BaseView, context: Any = NO_CONTEXT, locale: str | None = None) -> View:
    """Render ``view`` into a View, registering it on first use."""
    return make_view(render_html_for(request, view, context, locale))


def render_response_for(
    request: Request,
    view: BaseView,
    context: Any = NO_CONTEXT,
    locale: str | None = None,
) -> HTMLResponse:
    """Render ``view`` into a full HTML response, registering it on first use."""
    return make_response(render_html_for(request, view, context, locale))


async def render_for_async(
    request: Request,
    view: BaseView,
    context: Any = NO_CONTEXT,
    locale: str | None = None,
) -> View:
    """Run ``render_for`` in the threadpool so the event loop is not blocked."""
    return await run_in_threadpool(render_for, request, view, context, locale)


async def render_response_for_async(
    request: Request,
    view: BaseView,
    context: Any = NO_CONTEXT,
    locale: str | None = None,
) -> HTMLResponse:
    """Run ``render_response_for`` in the threadpool."""
    return await run_in_threadpool(render_response_for, request, view, context, locale)
