"""Registry of compiled view formulas backed by Jinja2."""

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jinja2
from fastapi.responses import HTMLResponse

from fastapi_htmlkit.exceptions import EvaluationError, FormulaNotFoundError, RegistrationError
from fastapi_htmlkit.localization import Localization
from fastapi_htmlkit.logging_config import get_logger, log_with_context
from fastapi_htmlkit.responses import View, make_response, make_view
from fastapi_htmlkit.views import BaseView, resolve_view_id

logger = get_logger(__name__)

# Bound by Formula.evaluate; views may not declare fields with these names
RESERVED_NAMES = frozenset({"context", "locale", "t"})


class _NoContext:
    def __repr__(self) -> str:
        return "NO_CONTEXT"


NO_CONTEXT: Any = _NoContext()


@dataclass(frozen=True)
class Formula:
    """A compiled view ready to produce HTML."""

    view_id: str
    view_type: type
    template: jinja2.Template
    takes_context: bool
    variables: Mapping[str, Any] = field(default_factory=dict)

    def evaluate(
        self,
        context: Any = NO_CONTEXT,
        localization: Localization | None = None,
        locale: str | None = None,
    ) -> str:
        """Render the formula.

        Raises:
            EvaluationError: If the context does not match the view kind or Jinja fails
        """
        if self.takes_context and context is NO_CONTEXT:
            raise EvaluationError(f"View '{self.view_id}' requires a context", details={"view_id": self.view_id})
        if not self.takes_context and context is not NO_CONTEXT:
            raise EvaluationError(f"Page '{self.view_id}' does not take a context", details={"view_id": self.view_id})

        active_locale = locale or (localization.default_locale if localization else None)

        def translate(key: str, **values: Any) -> str:
            if localization is None:
                return key
            return localization.translate(key, active_locale, **values)

        variables = dict(self.variables)
        variables["locale"] = active_locale
        variables["t"] = translate
        if self.takes_context:
            variables["context"] = context

        try:
            return self.template.render(variables)
        except jinja2.TemplateError as e:
            raise EvaluationError(
                f"Rendering view '{self.view_id}' failed: {e}",
                details={"view_id": self.view_id, "error_type": type(e).__name__},
            ) from e


@dataclass(frozen=True)
class Found:
    formula: Formula


@dataclass(frozen=True)
class NotFound:
    view_id: str


Lookup = Found | NotFound


class Renderer:
    """Maps view ids to formulas.

    Registration is serialized by a lock; the last registration of a view id
    wins. Lookups never mutate the registry.
    """

    def __init__(
        self,
        environment: jinja2.Environment | None = None,
        template_directory: str | Path | None = None,
        autoescape: bool = True,
    ):
        if environment is None:
            loader = jinja2.FileSystemLoader(str(template_directory)) if template_directory is not None else None
            environment = jinja2.Environment(
                loader=loader,
                autoescape=autoescape,
                undefined=jinja2.StrictUndefined,
            )
        self.environment = environment
        self.localization: Localization | None = None
        self._formulas: dict[str, Formula] = {}
        self._lock = threading.RLock()

    def __contains__(self, view_type: type) -> bool:
        return isinstance(self.lookup(view_type), Found)

    def __len__(self) -> int:
        return len(self._formulas)

    def registered_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._formulas)

    def add(self, view: BaseView) -> Formula:
        """Compile a view instance and register it under its view id.

        Raises:
            RegistrationError: If the value is not a view or its template is malformed
        """
        if not isinstance(view, BaseView):
            raise RegistrationError(
                f"Cannot register {type(view).__name__}: not a Page or Template",
                details={"type": type(view).__name__},
            )

        view_type = type(view)
        view_id = resolve_view_id(view_type)
        variables = view.template_vars()
        reserved = sorted(RESERVED_NAMES.intersection(variables))
        if reserved:
            raise RegistrationError(
                f"View '{view_id}' uses reserved template names: {', '.join(reserved)}",
                details={"view_id": view_id, "reserved": reserved},
            )

        formula = Formula(
            view_id=view_id,
            view_type=view_type,
            template=self._compile(view_type, view_id),
            takes_context=view_type.takes_context,
            variables=variables,
        )

        with self._lock:
            replaced = view_id in self._formulas
            self._formulas[view_id] = formula

        log_with_context(
            logger,
            "debug",
            "Formula registered",
            view_id=view_id,
            replaced=replaced,
            event_type="formula_registered",
        )
        return formula

    def lookup(self, view_type: type) -> Lookup:
        """Find the formula registered for a view type.

        A formula registered by another class under the same view id does not
        match; registering this class replaces it.
        """
        view_id = resolve_view_id(view_type)
        with self._lock:
            formula = self._formulas.get(view_id)
        if formula is None or formula.view_type is not view_type:
            return NotFound(view_id)
        return Found(formula)

    def render_raw(self, view_type: type, context: Any = NO_CONTEXT, locale: str | None = None) -> str:
        """Render a registered view type to an HTML string.

        Raises:
            FormulaNotFoundError: If the view type was never registered
            EvaluationError: If rendering fails
        """
        result = self.lookup(view_type)
        if isinstance(result, NotFound):
            raise FormulaNotFoundError(result.view_id)
        return self.evaluate(result.formula, context, locale)

    def evaluate(self, formula: Formula, context: Any = NO_CONTEXT, locale: str | None = None) -> str:
        return formula.evaluate(context, self.localization, locale)

    def render(self, view_type: type, context: Any = NO_CONTEXT, locale: str | None = None) -> HTMLResponse:
        """Render a registered view type into a full HTML response."""
        return make_response(self.render_raw(view_type, context, locale))

    def render_view(self, view_type: type, context: Any = NO_CONTEXT, locale: str | None = None) -> View:
        """Render a registered view type into a View."""
        return make_view(self.render_raw(view_type, context, locale))

    def register_localization(self, path: str | Path, default_locale: str = "en") -> Localization:
        """Load localization tables used by the ``t`` template function.

        Raises:
            LocalizationError: If the tables cannot be loaded
        """
        localization = Localization.load(path, default_locale)
        with self._lock:
            self.localization = localization
        return localization

    def _compile(self, view_type: type[BaseView], view_id: str) -> jinja2.Template:
        try:
            if view_type.source is not None:
                return self.environment.from_string(view_type.source)
            if view_type.template_name is not None:
                return self.environment.get_template(view_type.template_name)
        except jinja2.TemplateSyntaxError as e:
            raise RegistrationError(
                f"Template of view '{view_id}' is malformed: {e.message} (line {e.lineno})",
                details={"view_id": view_id, "lineno": e.lineno},
            ) from e
        except (jinja2.TemplateNotFound, TypeError) as e:
            # TypeError: get_template without a loader configured
            raise RegistrationError(
                f"Template of view '{view_id}' could not be loaded: {e}",
                details={"view_id": view_id},
            ) from e

        raise RegistrationError(
            f"View '{view_id}' declares neither source nor template_name",
            details={"view_id": view_id},
        )
