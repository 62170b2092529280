"""Detect resources that are garbage-collected without being released."""

import logging

from .config import ConfigurationError, TrackerSettings
from .exceptions import LeakTrackError, ResourceLeakError, UsageError
from .handle import Handle, new_handle
from .logging_config import setup_logging
from .tracked_resource import TrackedResource
from .tracker import (
    Tracker,
    default_tracker,
    failure_strategy,
    log_registry_summary,
    lookup_group,
    set_failure_strategy,
    track,
    untrack,
)
from .tracker_helpers import (
    GROUP_PREFIX,
    ChannelStrategy,
    FailureStrategy,
    GroupRegistry,
    LoggingStrategy,
    PanicStrategy,
    RegistryGroup,
    StackFrame,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ChannelStrategy",
    "ConfigurationError",
    "FailureStrategy",
    "GROUP_PREFIX",
    "GroupRegistry",
    "Handle",
    "LeakTrackError",
    "LoggingStrategy",
    "PanicStrategy",
    "RegistryGroup",
    "ResourceLeakError",
    "StackFrame",
    "TrackedResource",
    "Tracker",
    "TrackerSettings",
    "UsageError",
    "default_tracker",
    "failure_strategy",
    "log_registry_summary",
    "lookup_group",
    "new_handle",
    "set_failure_strategy",
    "setup_logging",
    "track",
    "untrack",
]
