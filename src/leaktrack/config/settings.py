"""Tracker settings loaded from ``LEAKTRACK_*`` environment variables."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import ConfigurationError
from .runtime import env_bool, env_int, env_log_level

DEFAULT_STACK_DEPTH = 32


@dataclass(frozen=True)
class TrackerSettings:
    """Behaviour switches for a Tracker."""

    collect_stack: bool = True
    stack_depth: int = DEFAULT_STACK_DEPTH
    registry_enabled: bool = True
    strict_untrack: bool = False
    abort_on_leak: bool = False
    log_level: int = logging.DEBUG

    def __post_init__(self) -> None:
        if self.stack_depth <= 0:
            raise ConfigurationError.invalid_value("stack_depth", self.stack_depth, "Must be positive")

    @classmethod
    def from_env(cls) -> "TrackerSettings":
        """Build settings from the environment, falling back to the dataclass defaults."""
        return cls(
            collect_stack=bool(env_bool("LEAKTRACK_COLLECT_STACK", or_value=cls.collect_stack)),
            stack_depth=int(env_int("LEAKTRACK_STACK_DEPTH", or_value=cls.stack_depth)),
            registry_enabled=bool(env_bool("LEAKTRACK_REGISTRY_ENABLED", or_value=cls.registry_enabled)),
            strict_untrack=bool(env_bool("LEAKTRACK_STRICT_UNTRACK", or_value=cls.strict_untrack)),
            abort_on_leak=bool(env_bool("LEAKTRACK_ABORT_ON_LEAK", or_value=cls.abort_on_leak)),
            log_level=env_log_level("LEAKTRACK_LOG_LEVEL", cls.log_level),
        )
