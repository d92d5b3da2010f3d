"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os

import pytest

# Set TESTING mode BEFORE any app imports to prevent .env file loading.
os.environ["TESTING"] = "1"

# Clear environment variables BEFORE any imports that might use Pydantic Settings
# This runs at conftest import time, before test collection
_ENV_VARS_TO_CLEAR = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_INCLUDE_TIMESTAMP",
    "LOG_INCLUDE_CALLER",
    "EXPORT_COLUMN_LABELS",
    "API_HOST",
    "API_PORT",
    "API_CORS_ORIGINS",
]

for _var in _ENV_VARS_TO_CLEAR:
    os.environ.pop(_var, None)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear environment variables that might be set by .env file.

    This ensures tests use code defaults, not local developer overrides.
    Also clears any cached settings to force re-read of defaults.
    """
    for var in _ENV_VARS_TO_CLEAR:
        monkeypatch.delenv(var, raising=False)

    from haemo_scoring.config import get_settings  # noqa: PLC0415

    get_settings.cache_clear()


def _answers(prefix: str, numbers: range, value: str) -> dict[str, object]:
    return {f"{prefix}{n}": value for n in numbers}


@pytest.fixture
def hal_all_best() -> dict[str, object]:
    """Every HAL item answered 'never difficult'."""
    return _answers("q", range(1, 43), "6")


@pytest.fixture
def hal_all_worst() -> dict[str, object]:
    """Every HAL item answered 'impossible'."""
    return _answers("q", range(1, 43), "1")


@pytest.fixture
def haemqol_all_twos() -> dict[str, object]:
    """Every HAEMO-QoL-A item answered 2."""
    return _answers("hq", range(1, 42), "2")
