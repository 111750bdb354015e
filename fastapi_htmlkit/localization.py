"""Localization tables loaded from a directory of ``<locale>.json`` files.

Each file holds a JSON object. Nested objects are flattened into dotted keys.
A leaf is either a string or a plural object with ``zero``/``one``/``other``
forms. Strings may contain ``%{name}`` placeholders.

    locales/
        en.json   {"greeting": "Hello %{name}", "inbox": {"one": "1 message", "other": "%{count} messages"}}
        de.json   {"greeting": "Hallo %{name}"}
"""

import json
import re
from pathlib import Path
from typing import Any

from fastapi_htmlkit.exceptions import LocalizationError
from fastapi_htmlkit.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

PLURAL_FORMS = ("zero", "one", "other")
PLACEHOLDER = re.compile(r"%\{(\w+)\}")

Entry = str | dict[str, str]


class Localization:
    """Translation tables for every locale found in a directory."""

    def __init__(self, tables: dict[str, dict[str, Entry]], default_locale: str):
        self.tables = tables
        self.default_locale = default_locale

    @property
    def locales(self) -> list[str]:
        return sorted(self.tables)

    @classmethod
    def load(cls, path: str | Path, default_locale: str = "en") -> "Localization":
        """Load every ``<locale>.json`` file below ``path``.

        Raises:
            LocalizationError: If the directory is missing, holds no tables,
                a table is malformed, or the default locale has no table
        """
        directory = Path(path)
        if not directory.is_dir():
            raise LocalizationError(
                f"Localization directory '{directory}' does not exist",
                details={"path": str(directory)},
            )

        tables: dict[str, dict[str, Entry]] = {}
        for file_path in sorted(directory.glob("*.json")):
            tables[file_path.stem] = _load_table(file_path)

        if not tables:
            raise LocalizationError(
                f"No localization tables found in '{directory}'",
                details={"path": str(directory)},
            )

        if default_locale not in tables:
            raise LocalizationError(
                f"Default locale '{default_locale}' has no table in '{directory}'",
                details={"path": str(directory), "default_locale": default_locale, "locales": sorted(tables)},
            )

        log_with_context(
            logger,
            "info",
            "Localization tables loaded",
            path=str(directory),
            locales=sorted(tables),
            default_locale=default_locale,
            event_type="localization_loaded",
        )
        return cls(tables, default_locale)

    def translate(self, key: str, locale: str | None = None, **values: Any) -> str:
        """Translate ``key`` into ``locale``.

        Falls back to the default locale, then to the key itself.
        """
        entry = None
        for candidate in (locale, self.default_locale):
            if candidate is not None and key in self.tables.get(candidate, {}):
                entry = self.tables[candidate][key]
                break

        if entry is None:
            log_with_context(
                logger,
                "debug",
                "Missing translation",
                key=key,
                locale=locale or self.default_locale,
                event_type="localization_miss",
            )
            return key

        if isinstance(entry, dict):
            entry = _plural_form(entry, values.get("count"))

        return PLACEHOLDER.sub(lambda match: str(values.get(match.group(1), match.group(0))), entry)


def _plural_form(forms: dict[str, str], count: Any) -> str:
    if count == 0 and "zero" in forms:
        return forms["zero"]
    if count == 1 and "one" in forms:
        return forms["one"]
    return forms.get("other") or next(iter(forms.values()))


def _load_table(file_path: Path) -> dict[str, Entry]:
    try:
        document = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise LocalizationError(
            f"Localization table '{file_path.name}' could not be read: {e}",
            details={"path": str(file_path)},
        ) from e

    if not isinstance(document, dict):
        raise LocalizationError(
            f"Localization table '{file_path.name}' must contain a JSON object",
            details={"path": str(file_path)},
        )

    table: dict[str, Entry] = {}
    _flatten(document, "", table, file_path)
    return table


def _flatten(node: dict[str, Any], prefix: str, table: dict[str, Entry], file_path: Path) -> None:
    for key, value in node.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, str):
            table[full_key] = value
        elif isinstance(value, dict) and value and set(value) <= set(PLURAL_FORMS):
            if not all(isinstance(form, str) for form in value.values()):
                raise LocalizationError(
                    f"Plural forms of '{full_key}' in '{file_path.name}' must be strings",
                    details={"path": str(file_path), "key": full_key},
                )
            table[full_key] = dict(value)
        elif isinstance(value, dict):
            _flatten(value, f"{full_key}.", table, file_path)
        else:
            raise LocalizationError(
                f"Value of '{full_key}' in '{file_path.name}' must be a string or an object",
                details={"path": str(file_path), "key": full_key},
            )
