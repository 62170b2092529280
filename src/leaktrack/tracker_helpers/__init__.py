"""Helper modules for Tracker."""

from .failure_strategies import ChannelStrategy, FailureStrategy, LoggingStrategy, PanicStrategy
from .registry import GROUP_PREFIX, GroupRegistry, RegistryGroup
from .stack_tracer import StackFrame, capture_stack, format_frames

__all__ = [
    "ChannelStrategy",
    "FailureStrategy",
    "GROUP_PREFIX",
    "GroupRegistry",
    "LoggingStrategy",
    "PanicStrategy",
    "RegistryGroup",
    "StackFrame",
    "capture_stack",
    "format_frames",
]
