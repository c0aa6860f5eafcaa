"""Shared fixtures for transcript-parser tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest

_ENV_VARS = (
    "TRANSCRIPT_REMOVE_ACTIONS",
    "TRANSCRIPT_REMOVE_ANNOTATIONS",
    "TRANSCRIPT_REMOVE_TIMESTAMPS",
    "TRANSCRIPT_REMOVE_UNKNOWN_SPEAKERS",
    "TRANSCRIPT_CONCISE",
    "TRANSCRIPT_BLACKLIST",
    "LOG_LEVEL",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all transcript-parser environment variables.

    Patches ``load_dotenv`` so a real ``.env`` file cannot re-inject values
    that the test explicitly removed.
    """
    monkeypatch.setattr("transcript_parser.config.load_dotenv", lambda *_a, **_kw: None)
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_loggers() -> Generator[None, None, None]:
    """Reset the root and package loggers after each test to prevent handler leaks."""
    root = logging.getLogger()
    package = logging.getLogger("transcript_parser")
    original_handlers = root.handlers[:]
    original_level = root.level
    package_handlers = package.handlers[:]
    package_level = package.level
    package_propagate = package.propagate
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.handlers = package_handlers
    package.setLevel(package_level)
    package.propagate = package_propagate
