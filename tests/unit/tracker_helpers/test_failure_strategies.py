"""Tests for leak failure strategies."""

import logging
import queue

import pytest

from leaktrack import ChannelStrategy, Handle, LoggingStrategy, PanicStrategy, ResourceLeakError
from leaktrack.tracker_helpers import failure_strategies
from leaktrack.tracker_helpers.registry import GroupRegistry
from leaktrack.tracker_helpers.stack_tracer import StackFrame

GROUP = "resource/pkg.Conn"


@pytest.fixture
def registry_with_handle():
    registry = GroupRegistry()
    handle = Handle()
    handle.bind("Conn", GROUP, (StackFrame("pkg.open", "/pkg.py", 7),))
    registry.get_or_create(GROUP).add(handle)
    return registry, handle


def test_panic_strategy_raises_and_forgets(registry_with_handle, caplog):
    registry, handle = registry_with_handle

    with pytest.raises(ResourceLeakError) as exc_info:
        PanicStrategy(registry)(handle)

    assert str(exc_info.value) == handle.build_diagnostic_message()
    assert exc_info.value.type_name == "Conn"
    assert registry.lookup(GROUP).count() == 0
    assert "Conn became unreachable without being released!" in caplog.text
    assert caplog.records[-1].levelno == logging.CRITICAL


def test_panic_strategy_aborts_when_configured(registry_with_handle, monkeypatch: pytest.MonkeyPatch):
    registry, handle = registry_with_handle
    aborted = []
    monkeypatch.setattr(failure_strategies.os, "abort", lambda: aborted.append(True))
    monkeypatch.setattr(failure_strategies.logging, "shutdown", lambda: None)

    with pytest.raises(ResourceLeakError):
        PanicStrategy(registry, abort=True)(handle)

    assert aborted == [True]


def test_panic_strategy_without_registry(registry_with_handle):
    registry, handle = registry_with_handle

    with pytest.raises(ResourceLeakError):
        PanicStrategy()(handle)

    assert registry.lookup(GROUP).count() == 1


def test_channel_strategy_delivers_message(registry_with_handle):
    registry, handle = registry_with_handle
    channel: "queue.Queue[str]" = queue.Queue()

    strategy = ChannelStrategy(channel)
    strategy(handle)

    assert strategy.channel is channel
    assert strategy.get(timeout=1) == handle.build_diagnostic_message()
    assert registry.lookup(GROUP).count() == 1


def test_logging_strategy_reports_and_forgets(registry_with_handle, caplog):
    registry, handle = registry_with_handle

    LoggingStrategy(registry, level=logging.WARNING)(handle)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "Resource leak detected: Conn became unreachable" in record.getMessage()
    assert record.leaktrack["group_key"] == GROUP
    assert registry.lookup(GROUP).count() == 0
