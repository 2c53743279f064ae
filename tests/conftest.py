"""Pytest configuration and shared fixtures for jsonkit tests."""

from __future__ import annotations

from typing import Any

import pytest

from jsonkit.history import HistoryStore, MemoryStorage


class FakeClock:
    """Deterministic millisecond clock for history tests."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        self.now += 1000
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Return a clock advancing one second per call."""
    return FakeClock()


@pytest.fixture
def history_store(clock: FakeClock) -> HistoryStore:
    """Return an in-memory history store with a fake clock."""
    return HistoryStore(MemoryStorage(), clock=clock)


@pytest.fixture
def original_doc() -> dict[str, Any]:
    """Return an original document with nested objects and arrays."""
    return {
        "name": "service",
        "version": 1,
        "tags": ["api", "internal"],
        "owner": {"team": "platform", "oncall": True},
        "limits": None,
    }


@pytest.fixture
def modified_doc() -> dict[str, Any]:
    """Return a modified version of original_doc."""
    return {
        "name": "service",
        "version": 2,
        "tags": ["api"],
        "owner": {"team": "platform", "oncall": True, "slack": "#platform"},
        "limits": {"rps": 100},
    }
