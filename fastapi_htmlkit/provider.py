"""The view provider binding FastAPI applications to one renderer."""

import threading
from pathlib import Path

from fastapi import FastAPI

from fastapi_htmlkit.config import HTMLKitSettings, get_settings
from fastapi_htmlkit.core.lifespan import install_startup_hook
from fastapi_htmlkit.logging_config import get_logger, log_with_context
from fastapi_htmlkit.renderer import Formula, Renderer
from fastapi_htmlkit.views import BaseView

logger = get_logger(__name__)

_shared_lock = threading.RLock()


def _run_provider_startup(app: FastAPI) -> None:
    app.state.htmlkit.on_startup(app)


class Provider:
    """Process-wide owner of the view renderer and its localization settings.

    Build it once while assembling the application and let request handlers
    reach it through ``fastapi_htmlkit.dependencies``:

        provider = Provider.get_or_create(app)
        provider.add(WelcomePage())

    ``localization_path`` and ``default_locale`` may be changed until the
    application starts; the tables are loaded by the startup hook.
    """

    _shared: "Provider | None" = None

    def __init__(self, app: FastAPI, settings: HTMLKitSettings | None = None):
        settings = settings or get_settings()
        self.renderer = Renderer(
            template_directory=settings.template_directory,
            autoescape=settings.autoescape,
        )
        self.localization_path: Path | None = settings.localization_path
        self.default_locale: str | None = settings.default_locale
        self.bind(app)

    @classmethod
    def get_or_create(cls, app: FastAPI, settings: HTMLKitSettings | None = None) -> "Provider":
        """Return the shared provider, creating it on first use.

        ``settings`` only applies to the call that creates the provider.
        """
        provider = cls._shared
        if provider is None:
            with _shared_lock:
                provider = cls._shared
                if provider is None:
                    provider = cls(app, settings)
                    cls._shared = provider
                    log_with_context(
                        logger,
                        "info",
                        "View provider created",
                        localization_path=str(provider.localization_path) if provider.localization_path else None,
                        default_locale=provider.default_locale,
                        event_type="provider_created",
                    )
        provider.bind(app)
        return provider

    @classmethod
    def reset(cls) -> None:
        """Forget the shared provider (application teardown)."""
        with _shared_lock:
            cls._shared = None

    def bind(self, app: FastAPI) -> None:
        """Expose the provider on ``app.state`` and hook it into startup.

        The hook is installed once per app and runs whichever provider is
        bound when the app starts.
        """
        with _shared_lock:
            if getattr(app.state, "htmlkit", None) is self:
                return
            app.state.htmlkit = self
            if not getattr(app.state, "htmlkit_startup_hooked", False):
                install_startup_hook(app, _run_provider_startup)
                app.state.htmlkit_startup_hooked = True

    def add(self, view: BaseView) -> Formula:
        """Register a view with the renderer."""
        return self.renderer.add(view)

    def on_startup(self, app: FastAPI) -> None:
        """Load the localization tables if a directory is configured.

        Raises:
            LocalizationError: If the tables cannot be loaded
        """
        if self.localization_path is None:
            return

        localization = self.renderer.register_localization(self.localization_path, self.default_locale or "en")
        log_with_context(
            logger,
            "info",
            "Localization registered",
            path=str(self.localization_path),
            locales=localization.locales,
            event_type="localization_registered",
        )
