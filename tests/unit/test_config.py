"""Unit tests for configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from fastapi_htmlkit.config import HTMLKitSettings, get_settings


def test_settings_defaults():
    """Test HTMLKitSettings has correct defaults."""
    settings = HTMLKitSettings(_env_file=None)

    assert settings.localization_path is None
    assert settings.default_locale == "en"
    assert settings.template_directory is None
    assert settings.autoescape is True
    assert settings.log_level == "INFO"


def test_settings_from_environment(monkeypatch, tmp_path):
    """Test settings are read from HTMLKIT_ prefixed variables."""
    monkeypatch.setenv("HTMLKIT_LOCALIZATION_PATH", str(tmp_path))
    monkeypatch.setenv("HTMLKIT_DEFAULT_LOCALE", "de")
    monkeypatch.setenv("HTMLKIT_AUTOESCAPE", "false")

    settings = HTMLKitSettings(_env_file=None)

    assert settings.localization_path == tmp_path
    assert settings.default_locale == "de"
    assert settings.autoescape is False


def test_default_locale_is_stripped():
    """Test surrounding whitespace is removed from the default locale."""
    settings = HTMLKitSettings(_env_file=None, default_locale="  fr ")

    assert settings.default_locale == "fr"


def test_blank_default_locale_rejected():
    """Test a blank default locale is rejected."""
    with pytest.raises(ValidationError):
        HTMLKitSettings(_env_file=None, default_locale="   ")


def test_paths_expand_user():
    """Test ~ is expanded in configured directories."""
    settings = HTMLKitSettings(_env_file=None, localization_path="~/locales")

    assert settings.localization_path == Path("~/locales").expanduser()


def test_log_level_normalized():
    """Test log level is upper-cased and validated."""
    assert HTMLKitSettings(_env_file=None, log_level="debug").log_level == "DEBUG"

    with pytest.raises(ValidationError):
        HTMLKitSettings(_env_file=None, log_level="verbose")


def test_get_settings_is_cached():
    """Test get_settings returns the same instance."""
    assert get_settings() is get_settings()
