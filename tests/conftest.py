"""Pytest fixtures for the shapecheck test-suite."""

import pytest

from shapecheck import default_context, get_settings


@pytest.fixture(autouse=True)
def _reset_state(monkeypatch):
    """Start every test with fresh settings and assertions disabled."""
    monkeypatch.delenv("SHAPECHECK_ENABLED", raising=False)
    monkeypatch.delenv("SHAPECHECK_WARN_RECOMMENDED", raising=False)
    get_settings.cache_clear()
    default_context.disable()
    yield
    default_context.disable()
    get_settings.cache_clear()
