"""Shared test fixtures."""

from __future__ import annotations

import pytest

from cspolicy.policy import Policy

ARGUMENTS = {
    "default-src": ["https://www.google.com"],
    "script-src": ["https://www.google.com"],
}


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    """Provide default settings for all tests."""
    monkeypatch.setenv("CSP_LOG_JSON", "false")
    monkeypatch.setenv("CSP_LOG_LEVEL", "debug")

    # Reset cached settings and presets
    import cspolicy.config.loader as loader
    from cspolicy.config.presets import reset_presets_cache

    loader._settings = None
    reset_presets_cache()
    yield
    loader._settings = None
    reset_presets_cache()


@pytest.fixture
def policy() -> Policy:
    """default-src and script-src both allowing self + google."""
    return Policy(ARGUMENTS)
