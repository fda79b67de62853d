"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

from pathlib import Path

import pytest

_PULLCOUNT_ENV_VARS = (
    "PULLCOUNT_GITHUB_TOKEN",
    "PULLCOUNT_GITHUB_API_URL",
    "PULLCOUNT_HTTP_TIMEOUT_S",
    "PULLCOUNT_MAX_PAGES",
    "PULLCOUNT_MAX_CONCURRENCY",
    "PULLCOUNT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_pullcount_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shell settings out of tests."""
    for name in _PULLCOUNT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return the directory holding recorded API payloads."""
    return Path(__file__).resolve().parent / "fixtures"
