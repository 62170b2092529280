"""Exception classes for resource lifetime tracking.

Exception classes support two patterns:
1. No-argument raise: raise UsageError()
2. Contextual attributes: err = UsageError(type_name="Conn"); raise err
"""

from typing import Any


class LeakTrackError(Exception):
    """Base exception for all tracking errors.

    Supports keyword arguments that are stored as attributes for debugging.
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = self.__class__.__doc__ or "Tracking error occurred"
        super().__init__(message)
        for key, value in kwargs.items():
            setattr(self, key, value)


class UsageError(LeakTrackError):
    """Tracker API was used incorrectly."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        if not message:
            message = "Tracker API was used incorrectly"
        super().__init__(message, **kwargs)

    @classmethod
    def missing_argument(cls, name: str) -> "UsageError":
        """Create error for a None resource or handle."""
        return cls(f"{name} must not be None", argument=name)

    @classmethod
    def already_tracked(cls, type_name: str) -> "UsageError":
        """Create error for tracking a handle twice."""
        return cls(f"handle is already tracking a {type_name}", type_name=type_name)

    @classmethod
    def not_tracked(cls, group_key: str = "") -> "UsageError":
        """Create error for untracking a handle unknown to the registry."""
        msg = "resource is not tracked"
        if group_key:
            msg += f" (no registry group {group_key!r})"
        return cls(msg, group_key=group_key)

    @classmethod
    def not_weakrefable(cls, type_name: str) -> "UsageError":
        """Create error for resources that cannot be weakly referenced."""
        return cls(
            f"{type_name} does not support weak references; add '__weakref__' to its __slots__",
            type_name=type_name,
        )

    @classmethod
    def duplicate_member(cls, group_key: str) -> "UsageError":
        """Create error for adding the same handle to a group twice."""
        return cls(f"{group_key}: add of duplicate handle", group_key=group_key)


class ResourceLeakError(LeakTrackError):
    """Resource became unreachable without being released."""

    def __init__(self, message: str = "", *, type_name: str = "", group_key: str = "", **kwargs: Any) -> None:
        if not message:
            message = f"{type_name or 'resource'} became unreachable without being released!"
        super().__init__(message, type_name=type_name, group_key=group_key, **kwargs)


__all__ = ["LeakTrackError", "UsageError", "ResourceLeakError"]
