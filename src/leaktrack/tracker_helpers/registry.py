"""Live registry of tracked handles, grouped by resource type."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ..exceptions import UsageError

if TYPE_CHECKING:
    from ..handle import Handle

logger = logging.getLogger(__name__)

GROUP_PREFIX = "resource/"


def type_names(resource: object) -> Tuple[str, str]:
    """Return ``(type name, group key)`` for a resource instance."""
    cls = type(resource)
    qualname = cls.__qualname__
    return qualname, f"{GROUP_PREFIX}{cls.__module__}.{qualname}"


def group_key_for(cls: type) -> str:
    return f"{GROUP_PREFIX}{cls.__module__}.{cls.__qualname__}"


class RegistryGroup:
    """Handles of currently tracked resources of one type."""

    def __init__(self, name: str):
        self.name = name
        # Single dict operations only, no lock: membership changes may run from a
        # garbage-collector callback that interrupted another method on this thread.
        self._members: Dict["Handle", object] = {}

    def __repr__(self) -> str:
        return f"<RegistryGroup {self.name} count={self.count()}>"

    def __contains__(self, handle: object) -> bool:
        return handle in self._members

    def add(self, handle: "Handle") -> None:
        marker = object()
        if self._members.setdefault(handle, marker) is not marker:
            raise UsageError.duplicate_member(self.name)

    def remove(self, handle: "Handle") -> bool:
        """Remove a handle. Returns False if it was not a member."""
        return self._members.pop(handle, None) is not None

    def count(self) -> int:
        return len(self._members)

    def members(self) -> List["Handle"]:
        """Snapshot of current members in insertion order."""
        return list(self._members.copy())


class GroupRegistry:
    """Process-lifetime map of group name to RegistryGroup."""

    def __init__(self) -> None:
        self._groups: Dict[str, RegistryGroup] = {}
        self._create_lock = threading.Lock()

    def lookup(self, name: str) -> Optional[RegistryGroup]:
        return self._groups.get(name)

    def get_or_create(self, name: str) -> RegistryGroup:
        # fast path
        group = self._groups.get(name)
        if group is not None:
            return group

        # slow path
        with self._create_lock:
            # a concurrent call might have created the group already
            group = self._groups.get(name)
            if group is None:
                group = RegistryGroup(name)
                self._groups[name] = group
                logger.debug("Created registry group %s", name)
        return group

    def groups(self) -> List[RegistryGroup]:
        return [self._groups[name] for name in self.names()]

    def names(self) -> List[str]:
        return sorted(self._groups)

    def total_count(self) -> int:
        return sum(group.count() for group in self.groups())
