"""Configuration helpers and settings for resource tracking."""

from .errors import ConfigurationError
from .runtime import env_bool, env_int, env_log_level, env_str
from .settings import DEFAULT_STACK_DEPTH, TrackerSettings

__all__ = [
    "ConfigurationError",
    "DEFAULT_STACK_DEPTH",
    "TrackerSettings",
    "env_bool",
    "env_int",
    "env_log_level",
    "env_str",
]
