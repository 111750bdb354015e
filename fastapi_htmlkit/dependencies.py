"""FastAPI dependencies for reaching the view provider."""

from fastapi import Request

from fastapi_htmlkit.provider import Provider
from fastapi_htmlkit.renderer import Renderer


def get_provider(request: Request) -> Provider:
    """
    Get the view provider from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The provider bound to the application.

    Raises:
        RuntimeError: If no provider was installed on the application.
    """
    provider: Provider | None = getattr(request.app.state, "htmlkit", None)

    if provider is None:
        raise RuntimeError("View provider not installed. Call Provider.get_or_create(app) first.")

    return provider


def get_renderer(request: Request) -> Renderer:
    """
    Get the view renderer from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The renderer owned by the application's provider.
    """
    return get_provider(request).renderer
