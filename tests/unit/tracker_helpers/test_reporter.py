"""Tests for registry reporter."""

import logging

from leaktrack import Handle
from leaktrack.tracker_helpers.registry import GroupRegistry
from leaktrack.tracker_helpers.reporter import RegistryReporter
from leaktrack.tracker_helpers.stack_tracer import StackFrame


def test_log_summary_lists_live_groups(caplog):
    caplog.set_level(logging.INFO)
    registry = GroupRegistry()
    handle = Handle()
    handle.bind("Conn", "resource/pkg.Conn", (StackFrame("pkg.open", "/pkg.py", 7),))
    registry.get_or_create("resource/pkg.Conn").add(handle)
    registry.get_or_create("resource/pkg.Idle")

    total = RegistryReporter(logging.INFO).log_summary(registry.groups())

    assert total == 1
    assert "Tracked resources: 1 live across 1 of 2 groups" in caplog.text
    assert "resource/pkg.Conn: 1 still tracked" in caplog.text
    assert "tracked at /pkg.py:7" in caplog.text
    assert "resource/pkg.Idle" not in caplog.text


def test_log_summary_without_stack(caplog):
    registry = GroupRegistry()
    handle = Handle()
    handle.bind("Conn", "resource/pkg.Conn", ())
    registry.get_or_create("resource/pkg.Conn").add(handle)

    RegistryReporter(logging.DEBUG).log_summary(registry.groups())

    assert "tracked at unknown location" in caplog.text


def test_log_summary_empty_registry(caplog):
    caplog.set_level(logging.DEBUG)

    assert RegistryReporter(logging.DEBUG).log_summary([]) == 0
    assert "0 live across 0 of 0 groups" in caplog.text
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]
