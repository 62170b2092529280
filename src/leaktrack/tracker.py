"""
Resource lifetime tracking.

Resources are typically acquired in a constructor and released by ``close``
or a similar method. Tracking ties such a resource to the garbage collector:
if it becomes unreachable without ``untrack`` having been called, the active
failure strategy is invoked with a message that shows where tracking started.

Usage::

    class Connection:
        def __init__(self):
            self._handle = Handle()
            track(self, self._handle)

        def close(self):
            untrack(self, self._handle)

Currently tracked resources are also listed in registry groups named after
their types (``resource/<module>.<QualName>``).
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, ContextManager, Iterator, List, Optional, TextIO

from .config import TrackerSettings
from .exceptions import UsageError
from .handle import Handle
from .tracker_helpers.dependencies_factory import TrackerDependencies, TrackerDependenciesFactory
from .tracker_helpers.exporter import dumps_snapshot, snapshot, write_registry_text
from .tracker_helpers.failure_strategies import FailureStrategy
from .tracker_helpers.finalizer import arm_cleanup, cancel_cleanup
from .tracker_helpers.registry import GroupRegistry, RegistryGroup, group_key_for, type_names
from .tracker_helpers.stack_tracer import capture_stack

logger = logging.getLogger(__name__)

__all__ = [
    "Tracker",
    "default_tracker",
    "track",
    "untrack",
    "set_failure_strategy",
    "failure_strategy",
    "lookup_group",
    "log_registry_summary",
]


class Tracker:
    """
    Tracks resource lifetimes and owns the live registry and failure strategy.

    ``track`` and ``untrack`` may be called concurrently for different handles.
    ``untrack`` may also race with itself on one handle; only one call cancels
    the cleanup callback and only one removes the handle from its group.
    """

    def __init__(
        self,
        settings: Optional[TrackerSettings] = None,
        *,
        dependencies: Optional[TrackerDependencies] = None,
    ):
        self.settings = settings or TrackerSettings()
        deps = dependencies or TrackerDependenciesFactory.create(self.settings)
        self._registry = deps.registry
        self._reporter = deps.reporter
        self._default_strategy = deps.default_strategy
        self._strategy: FailureStrategy = self._default_strategy
        self._strategy_lock = threading.Lock()
        self._log_level = self.settings.log_level

    @property
    def registry(self) -> GroupRegistry:
        return self._registry

    def track(self, resource: Any, handle: Handle, *, stacklevel: int = 1) -> None:
        """
        Track the lifetime of ``resource`` until ``untrack`` is called on it.

        Args:
            resource: Object that must be released explicitly
            handle: Untracked handle dedicated to ``resource``
            stacklevel: Frame at which the acquisition stack starts,
                1 being the caller of this method

        Raises:
            UsageError: On None arguments, a handle that is already tracked,
                or a resource that cannot be weakly referenced
        """
        if resource is None:
            raise UsageError.missing_argument("resource")
        if handle is None:
            raise UsageError.missing_argument("handle")
        if handle.is_tracked:
            raise UsageError.already_tracked(handle.type_name)

        type_name, group_key = type_names(resource)

        group: Optional[RegistryGroup] = None
        if self.settings.registry_enabled:
            group = self._registry.get_or_create(group_key)
            # Register the handle rather than the resource,
            # otherwise the group would keep the resource reachable forever.
            group.add(handle)
        else:
            group_key = ""

        stack = ()
        if self.settings.collect_stack:
            stack = capture_stack(skip=stacklevel, limit=self.settings.stack_depth)

        try:
            token = arm_cleanup(resource, self._on_unreachable, handle)
        except TypeError as exc:
            if group is not None:
                group.remove(handle)
            raise UsageError.not_weakrefable(type_name) from exc

        # `resource` is referenced until this method returns, so the callback cannot run before bind
        handle.bind(type_name, group_key, stack)

        try:
            handle.store_token(token)
        except UsageError:
            # another thread tracked the same handle; it owns the session
            cancel_cleanup(token)
            raise

        logger.log(self._log_level, "Tracking %s (%s)", type_name, group_key or "registry disabled")

    def untrack(self, resource: Any, handle: Handle) -> None:
        """
        Stop tracking the lifetime of ``resource``.

        It is safe to call this method multiple times, including concurrently.

        Raises:
            UsageError: On None arguments, if the handle's group is unknown to
                this tracker, or (with ``strict_untrack``) if the handle was never tracked
        """
        if resource is None:
            raise UsageError.missing_argument("resource")
        if handle is None:
            raise UsageError.missing_argument("handle")

        token = handle.take_token()
        if token is not None:
            cancel_cleanup(token)

        # `resource` stays referenced by this frame until here, so the collector
        # cannot run the callback while it is being cancelled.
        del resource

        if not self.settings.registry_enabled:
            return

        if not handle.group_key:
            self._report_never_tracked(handle)
            return

        group = self._registry.lookup(handle.group_key)
        if group is None:
            raise UsageError.not_tracked(handle.group_key)

        if group.remove(handle):
            logger.log(self._log_level, "Untracked %s", handle.type_name)

    def _report_never_tracked(self, handle: Handle) -> None:
        if self.settings.strict_untrack:
            raise UsageError.not_tracked()
        logger.warning("untrack called for a handle that was never tracked: %r", handle)

    def _on_unreachable(self, handle: Handle) -> None:
        # Runs from the garbage collector, on whichever thread triggered it.
        handle.take_token()
        logger.log(self._log_level, "🧹 %s collected while still tracked", handle.type_name)
        self._strategy(handle)

    @property
    def default_strategy(self) -> FailureStrategy:
        return self._default_strategy

    def get_failure_strategy(self) -> FailureStrategy:
        return self._strategy

    def set_failure_strategy(self, strategy: Optional[FailureStrategy]) -> FailureStrategy:
        """
        Replace the strategy invoked for unreleased resources.

        Args:
            strategy: Callable taking the leaked Handle, or None for the default

        Returns:
            The previously active strategy
        """
        with self._strategy_lock:
            previous = self._strategy
            self._strategy = strategy if strategy is not None else self._default_strategy
        return previous

    @contextmanager
    def failure_strategy(self, strategy: FailureStrategy) -> Iterator[FailureStrategy]:
        """Use ``strategy`` within the block and restore the previous one afterwards."""
        previous = self.set_failure_strategy(strategy)
        try:
            yield strategy
        finally:
            self.set_failure_strategy(previous)

    def lookup_group(self, name: str) -> Optional[RegistryGroup]:
        return self._registry.lookup(name)

    def group_for(self, cls: type) -> Optional[RegistryGroup]:
        """Registry group for a resource class, if any instance was ever tracked."""
        return self._registry.lookup(group_key_for(cls))

    def groups(self) -> List[RegistryGroup]:
        return self._registry.groups()

    def live_handles(self) -> List[Handle]:
        return [handle for group in self._registry.groups() for handle in group.members()]

    def log_summary(self) -> int:
        return self._reporter.log_summary(self._registry.groups())

    def write_text(self, stream: TextIO) -> int:
        return write_registry_text(self._registry, stream)

    def snapshot(self) -> dict:
        return snapshot(self._registry)

    def dumps_snapshot(self) -> str:
        return dumps_snapshot(self._registry)


_default_tracker: Optional[Tracker] = None
_default_tracker_lock = threading.Lock()


def default_tracker() -> Tracker:
    """Get or create the process-wide tracker configured from the environment."""
    global _default_tracker

    tracker = _default_tracker
    if tracker is not None:
        return tracker

    with _default_tracker_lock:
        if _default_tracker is None:
            _default_tracker = Tracker(TrackerSettings.from_env())
            logger.debug("🔍 Resource tracker initialized")
        return _default_tracker


def track(resource: Any, handle: Handle) -> None:
    """Track ``resource`` with the process-wide tracker."""
    default_tracker().track(resource, handle, stacklevel=2)


def untrack(resource: Any, handle: Handle) -> None:
    """Stop tracking ``resource`` with the process-wide tracker."""
    default_tracker().untrack(resource, handle)


def set_failure_strategy(strategy: Optional[FailureStrategy]) -> FailureStrategy:
    return default_tracker().set_failure_strategy(strategy)


def failure_strategy(strategy: FailureStrategy) -> ContextManager[FailureStrategy]:
    """Use ``strategy`` on the process-wide tracker within a ``with`` block."""
    return default_tracker().failure_strategy(strategy)


def lookup_group(name: str) -> Optional[RegistryGroup]:
    return default_tracker().lookup_group(name)


def log_registry_summary() -> int:
    """Log diagnostic information about all live tracked resources."""
    return default_tracker().log_summary()
