"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import gc

import pytest

from leaktrack import ChannelStrategy, Tracker, TrackerSettings
from leaktrack.config import runtime


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch):
    """Keep a developer's .env files and LEAKTRACK_* variables out of tests."""
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", ())
    runtime._DEFAULT_VALUES = None
    for name in (
        "LEAKTRACK_COLLECT_STACK",
        "LEAKTRACK_STACK_DEPTH",
        "LEAKTRACK_REGISTRY_ENABLED",
        "LEAKTRACK_STRICT_UNTRACK",
        "LEAKTRACK_ABORT_ON_LEAK",
        "LEAKTRACK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    runtime._DEFAULT_VALUES = None


@pytest.fixture
def tracker() -> Tracker:
    instance = Tracker(TrackerSettings())
    yield instance
    gc.collect()


@pytest.fixture
def channel(tracker: Tracker) -> ChannelStrategy:
    """Redirect leak reports of ``tracker`` to a queue for the duration of a test."""
    strategy = ChannelStrategy()
    with tracker.failure_strategy(strategy):
        yield strategy
