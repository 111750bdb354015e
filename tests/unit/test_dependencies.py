"""Tests for dependency injection functions."""

from unittest.mock import MagicMock

import pytest
from starlette.datastructures import State

from fastapi_htmlkit.dependencies import get_provider, get_renderer


class TestDependencies:
    """Tests for dependency injection functions."""

    def test_get_provider(self, provider):
        """Test getting the provider from app state."""
        mock_request = MagicMock()
        mock_request.app.state.htmlkit = provider

        assert get_provider(mock_request) is provider

    def test_get_renderer(self, provider):
        """Test getting the renderer from app state."""
        mock_request = MagicMock()
        mock_request.app.state.htmlkit = provider

        assert get_renderer(mock_request) is provider.renderer

    def test_provider_not_installed(self):
        """Test a clear error when no provider was installed."""
        mock_request = MagicMock()
        mock_request.app.state = State()

        with pytest.raises(RuntimeError, match="not installed"):
            get_provider(mock_request)
