"""Per-resource tracking handle."""

from __future__ import annotations

import threading
import time
import weakref
from typing import Any, Dict, Optional, Tuple

from .exceptions import UsageError
from .tracker_helpers.stack_tracer import StackFrame, format_frames

UNRELEASED_SUFFIX = " became unreachable without being released!"
TRACKED_AT_HEADER = "It started being tracked at:"


class Handle:
    """
    Holds the pending cleanup callback that detects an unreleased resource.

    A handle must be passed to ``track`` and ``untrack`` together with its resource.
    Creating and storing a handle does not enable tracking by itself.
    One handle must not be shared between several resources; store it as an
    attribute of the resource it tracks.

    Handles compare by identity, so they can be registry group members
    without keeping the resource alive.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._token: Optional[weakref.finalize] = None
        self.type_name = ""
        self.group_key = ""
        self.acquisition_stack: Tuple[StackFrame, ...] = ()
        self.tracked_at: Optional[float] = None

    def __repr__(self) -> str:
        state = "tracked" if self.is_tracked else "untracked"
        return f"<Handle {self.type_name or '?'} {state}>"

    @property
    def is_tracked(self) -> bool:
        return self._token is not None

    def bind(self, type_name: str, group_key: str, acquisition_stack: Tuple[StackFrame, ...]) -> None:
        """Record what is being tracked for this session."""
        self.type_name = type_name
        self.group_key = group_key
        self.acquisition_stack = acquisition_stack
        self.tracked_at = time.time()

    def store_token(self, token: weakref.finalize) -> None:
        with self._lock:
            if self._token is not None:
                raise UsageError.already_tracked(self.type_name)
            self._token = token

    def take_token(self) -> Optional[weakref.finalize]:
        """Atomically take and clear the cleanup token; only one caller gets it."""
        with self._lock:
            token, self._token = self._token, None
        return token

    def build_diagnostic_message(self) -> str:
        msg = self.type_name + UNRELEASED_SUFFIX
        if self.acquisition_stack:
            msg += "\n" + TRACKED_AT_HEADER + "\n" + format_frames(self.acquisition_stack)
        return msg

    def describe(self) -> Dict[str, Any]:
        """Plain-data view used by exporters and structured logging."""
        return {
            "type_name": self.type_name,
            "group_key": self.group_key,
            "tracked_at": self.tracked_at,
            "stack": [
                {"function": frame.function, "filename": frame.filename, "lineno": frame.lineno}
                for frame in self.acquisition_stack
            ],
        }


def new_handle() -> Handle:
    """Create a fresh, untracked handle."""
    return Handle()
