"""Adapters from rendered HTML strings to FastAPI response types."""

from collections.abc import Mapping

from fastapi.responses import HTMLResponse, Response

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


class View(Response):
    """Rendered view wrapping the exact UTF-8 bytes of an HTML document.

    Route handlers can return it directly.
    """

    media_type = "text/html"
    charset = "utf-8"

    def __init__(
        self,
        data: bytes,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(content=data, status_code=status_code, headers=headers)

    @property
    def data(self) -> bytes:
        return bytes(self.body)

    def __len__(self) -> int:
        return len(self.body)


def make_response(html: str) -> HTMLResponse:
    """Wrap rendered HTML in a full response with a fixed HTML content type."""
    return HTMLResponse(content=html, headers={"content-type": HTML_CONTENT_TYPE})


def make_view(html: str) -> View:
    """Wrap the UTF-8 encoding of rendered HTML in a View."""
    return View(html.encode("utf-8"))
