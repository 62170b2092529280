"""Stack capture utilities for acquisition diagnostics."""

import sys
import traceback
from dataclasses import dataclass
from types import FrameType
from typing import Iterable, Tuple


@dataclass(frozen=True)
class StackFrame:
    """One captured frame, rendered as ``function`` then ``file:line``."""

    function: str
    filename: str
    lineno: int


def _function_name(frame: FrameType) -> str:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", code.co_name)
    module = frame.f_globals.get("__name__")
    if module:
        return f"{module}.{qualname}"
    return qualname


def capture_stack(skip: int = 0, limit: int = 32) -> Tuple[StackFrame, ...]:
    """
    Capture the current call stack, innermost frame first.

    Args:
        skip: Number of frames above the caller of this function to drop.
            ``0`` starts at the caller itself.
        limit: Maximum number of frames to keep

    Returns:
        Tuple of captured frames, empty if the stack is shallower than ``skip``
    """
    try:
        start = sys._getframe(skip + 1)
    except ValueError:
        return ()

    frames = []
    for frame, lineno in traceback.walk_stack(start):
        if len(frames) >= limit:
            break
        frames.append(StackFrame(_function_name(frame), frame.f_code.co_filename, lineno))
    return tuple(frames)


def format_frames(frames: Iterable[StackFrame]) -> str:
    """Render frames as ``function\\n\\tfile:line\\n`` pairs."""
    return "".join(f"{frame.function}\n\t{frame.filename}:{frame.lineno}\n" for frame in frames)
