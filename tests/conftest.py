"""Shared fixtures for the yamltags test-suite."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep host YAMLTAGS_* variables from leaking into settings-sensitive tests."""
    for name in ("YAMLTAGS_TAG_KEY", "YAMLTAGS_NAME_KEY", "YAMLTAGS_INCLUDE_PRIVATE"):
        monkeypatch.delenv(name, raising=False)
    yield
