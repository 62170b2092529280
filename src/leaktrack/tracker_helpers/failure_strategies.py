"""Strategies invoked when a tracked resource is collected without being released."""

from __future__ import annotations

import logging
import os
import queue
from typing import TYPE_CHECKING, Callable, Optional

from ..exceptions import ResourceLeakError

if TYPE_CHECKING:
    from ..handle import Handle
    from .registry import GroupRegistry

logger = logging.getLogger(__name__)

FailureStrategy = Callable[["Handle"], None]


def _forget(registry: Optional["GroupRegistry"], handle: "Handle") -> None:
    if registry is None or not handle.group_key:
        return
    group = registry.lookup(handle.group_key)
    if group is not None:
        group.remove(handle)


class PanicStrategy:
    """
    Default strategy: log the diagnostic and raise ResourceLeakError.

    The error is raised from inside the garbage collector's callback, where
    Python reports it through ``sys.unraisablehook``. With ``abort=True`` the
    process is terminated with ``os.abort()`` after logging instead.
    """

    def __init__(self, registry: Optional["GroupRegistry"] = None, *, abort: bool = False):
        self._registry = registry
        self.abort = abort

    def __call__(self, handle: "Handle") -> None:
        message = handle.build_diagnostic_message()
        _forget(self._registry, handle)
        logger.critical(message)
        if self.abort:
            logging.shutdown()
            os.abort()
        raise ResourceLeakError(message, type_name=handle.type_name, group_key=handle.group_key)


class ChannelStrategy:
    """Deliver diagnostic messages to a queue instead of failing; used in tests."""

    def __init__(self, channel: Optional["queue.Queue[str]"] = None):
        self.channel: "queue.Queue[str]" = channel if channel is not None else queue.Queue()

    def __call__(self, handle: "Handle") -> None:
        self.channel.put(handle.build_diagnostic_message())

    def get(self, timeout: Optional[float] = None) -> str:
        return self.channel.get(timeout=timeout)


class LoggingStrategy:
    """Report leaks as log records and keep running."""

    def __init__(self, registry: Optional["GroupRegistry"] = None, level: int = logging.ERROR):
        self._registry = registry
        self.level = level

    def __call__(self, handle: "Handle") -> None:
        _forget(self._registry, handle)
        logger.log(
            self.level,
            "Resource leak detected: %s",
            handle.build_diagnostic_message(),
            extra={"leaktrack": handle.describe()},
        )
