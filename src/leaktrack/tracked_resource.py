"""Mixin for classes whose instances must be released explicitly."""

from __future__ import annotations

from typing import Optional

from .handle import Handle
from .tracker import Tracker, default_tracker


class TrackedResource:
    """
    Base class wiring ``track``/``untrack`` into a resource's lifecycle.

    Subclasses call ``_start_tracking()`` from ``__init__`` and either use the
    provided ``close`` or call ``_stop_tracking()`` from their own release method.
    Instances are context managers that close on exit.
    """

    _tracking_handle: Optional[Handle] = None
    _tracker: Optional[Tracker] = None

    def _start_tracking(self, tracker: Optional[Tracker] = None, *, stacklevel: int = 1) -> Handle:
        tracker = tracker if tracker is not None else default_tracker()
        handle = Handle()
        self._tracking_handle = handle
        self._tracker = tracker
        # +1 skips this method so the stack starts at the subclass constructor
        tracker.track(self, handle, stacklevel=stacklevel + 1)
        return handle

    def _stop_tracking(self) -> None:
        if self._tracking_handle is None or self._tracker is None:
            return
        self._tracker.untrack(self, self._tracking_handle)

    @property
    def released(self) -> bool:
        return self._tracking_handle is None or not self._tracking_handle.is_tracked

    def close(self) -> None:
        self._stop_tracking()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
