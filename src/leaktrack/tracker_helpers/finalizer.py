"""Arming and cancelling garbage-collector cleanup callbacks."""

import weakref
from typing import Any, Callable


def arm_cleanup(resource: Any, callback: Callable[[Any], None], payload: Any) -> weakref.finalize:
    """
    Register ``callback(payload)`` to run once ``resource`` is collected.

    The callback must not reference ``resource``, otherwise it is never collected.
    Callbacks still pending at interpreter exit are not run.

    Raises:
        TypeError: If ``resource`` does not support weak references
    """
    token = weakref.finalize(resource, callback, payload)
    token.atexit = False
    return token


def cancel_cleanup(token: weakref.finalize) -> bool:
    """Disarm a pending callback. Returns False if it already ran or was cancelled."""
    return token.detach() is not None
