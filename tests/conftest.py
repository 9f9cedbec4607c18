"""Shared test fixtures."""

import pytest

from rawhandle import get_settings


class CleanupRecorder:
    """Cleanup function stand-in that records every value it is called with."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def __call__(self, value) -> None:
        self.calls.append(value)
        if self.fail:
            raise OSError(f"cannot free {value!r}")


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.delenv("RAWHANDLE_CLEANUP_ERRORS", raising=False)
    monkeypatch.delenv("RAWHANDLE_WARN_UNCLOSED", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recorder():
    return CleanupRecorder()


@pytest.fixture
def failing():
    return CleanupRecorder(fail=True)
