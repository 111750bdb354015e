"""View values: context-free pages and context-parameterized templates.

A view describes how to produce HTML. Subclasses declare either inline Jinja
``source`` or a ``template_name`` resolved through the renderer's loader.
Instance attributes become template variables when the instance is
registered, so two registrations of the same type can differ. The names
``context``, ``locale`` and ``t`` are bound at render time and cannot be
used as field names.

    @dataclass
    class WelcomePage(Page):
        source = "<h1>{{ greeting }}</h1>"
        greeting: str = "Hello"

Views are keyed in the renderer by ``view_id``, which defaults to the
dotted path of the class and may be pinned with a class attribute.
"""

import dataclasses
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from starlette.requests import Request

    from fastapi_htmlkit.responses import View

ContextT = TypeVar("ContextT")


class BaseView:
    """Common base of Page and Template."""

    source: ClassVar[str | None] = None
    template_name: ClassVar[str | None] = None
    view_id: ClassVar[str | None] = None

    def template_vars(self) -> dict[str, Any]:
        """Values exposed to the template, captured at registration time."""
        if dataclasses.is_dataclass(self):
            return {field.name: getattr(self, field.name) for field in dataclasses.fields(self)}
        return dict(vars(self))


class Page(BaseView):
    """A view rendered without a context."""

    takes_context: ClassVar[bool] = False

    def render(self, request: "Request", locale: str | None = None) -> "View":
        """Render the page for a request, registering it on first use."""
        from fastapi_htmlkit.rendering import render_for

        return render_for(request, self, locale=locale)

    async def render_async(self, request: "Request", locale: str | None = None) -> "View":
        """Render the page in the threadpool, registering it on first use."""
        from fastapi_htmlkit.rendering import render_for_async

        return await render_for_async(request, self, locale=locale)


class Template(BaseView, Generic[ContextT]):
    """A view rendered with a typed context, exposed to Jinja as ``context``."""

    takes_context: ClassVar[bool] = True

    def render(self, context: ContextT, request: "Request", locale: str | None = None) -> "View":
        """Render the template for a request, registering it on first use."""
        from fastapi_htmlkit.rendering import render_for

        return render_for(request, self, context, locale=locale)

    async def render_async(self, context: ContextT, request: "Request", locale: str | None = None) -> "View":
        """Render the template in the threadpool, registering it on first use."""
        from fastapi_htmlkit.rendering import render_for_async

        return await render_for_async(request, self, context, locale=locale)


def resolve_view_id(view_type: type) -> str:
    """Return the registry key for a view type."""
    pinned = view_type.__dict__.get("view_id")
    if isinstance(pinned, str) and pinned:
        return pinned
    return f"{view_type.__module__}.{view_type.__qualname__}"
