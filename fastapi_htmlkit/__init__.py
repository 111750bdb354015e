"""HTMLKit-style view rendering for FastAPI"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fastapi-htmlkit")
except PackageNotFoundError:
    __version__ = "dev"

from fastapi_htmlkit.exceptions import (  # noqa: E402
    EvaluationError,
    FormulaNotFoundError,
    HTMLKitException,
    LocalizationError,
    RegistrationError,
)
from fastapi_htmlkit.provider import Provider  # noqa: E402
from fastapi_htmlkit.renderer import NO_CONTEXT, Renderer  # noqa: E402
from fastapi_htmlkit.rendering import (  # noqa: E402
    render_for,
    render_for_async,
    render_response_for,
    render_response_for_async,
)
from fastapi_htmlkit.responses import View  # noqa: E402
from fastapi_htmlkit.views import Page, Template  # noqa: E402

__all__ = [
    "NO_CONTEXT",
    "EvaluationError",
    "FormulaNotFoundError",
    "HTMLKitException",
    "LocalizationError",
    "Page",
    "Provider",
    "RegistrationError",
    "Renderer",
    "Template",
    "View",
    "__version__",
    "render_for",
    "render_for_async",
    "render_response_for",
    "render_response_for_async",
]
