"""Pytest configuration and shared fixtures."""

import json
from types import SimpleNamespace

import pytest
from fastapi import FastAPI

from fastapi_htmlkit import config
from fastapi_htmlkit.config import HTMLKitSettings
from fastapi_htmlkit.provider import Provider


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop the shared provider and cached settings around every test."""
    Provider.reset()
    config._settings_instance = None
    yield
    Provider.reset()
    config._settings_instance = None


@pytest.fixture
def settings():
    """Settings that ignore the environment's .env file."""
    return HTMLKitSettings(_env_file=None)


@pytest.fixture
def app():
    """Bare FastAPI application."""
    return FastAPI()


@pytest.fixture
def provider(app, settings):
    """Provider installed on the app fixture."""
    return Provider.get_or_create(app, settings)


@pytest.fixture
def make_request():
    """Build a minimal request double exposing ``request.app``."""

    def _make(app: FastAPI):
        return SimpleNamespace(app=app)

    return _make


@pytest.fixture
def locales_dir(tmp_path):
    """Directory with English and German localization tables."""
    directory = tmp_path / "locales"
    directory.mkdir()
    (directory / "en.json").write_text(
        json.dumps(
            {
                "greeting": "Hello %{name}",
                "nav": {"home": "Home", "about": "About"},
                "inbox": {"zero": "No messages", "one": "1 message", "other": "%{count} messages"},
            }
        ),
        encoding="utf-8",
    )
    (directory / "de.json").write_text(
        json.dumps({"greeting": "Hallo %{name}", "nav": {"home": "Startseite"}}),
        encoding="utf-8",
    )
    return directory
