"""Export of registry groups for external introspection tools."""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional, TextIO

import orjson
import psutil

from .registry import GroupRegistry, RegistryGroup

logger = logging.getLogger(__name__)

PSUTIL_ERRORS = (psutil.Error, OSError)


def write_group_text(group: RegistryGroup, stream: TextIO, *, now: Optional[float] = None) -> int:
    """
    Write a group in a pprof-like text form.

    Returns:
        Number of members written
    """
    members = group.members()
    now = time.time() if now is None else now
    stream.write(f"{group.name} profile: total {len(members)}\n")
    for handle in members:
        age = now - handle.tracked_at if handle.tracked_at else 0.0
        stream.write(f"{handle.type_name} tracked for {age:.1f}s\n")
        for frame in handle.acquisition_stack:
            stream.write(f"#\t{frame.function}\t{frame.filename}:{frame.lineno}\n")
        stream.write("\n")
    return len(members)


def write_registry_text(registry: GroupRegistry, stream: TextIO) -> int:
    now = time.time()
    return sum(write_group_text(group, stream, now=now) for group in registry.groups())


def _process_info() -> Dict[str, Any]:
    pid = os.getpid()
    try:
        rss_mb = psutil.Process(pid).memory_info().rss / 1024 / 1024
    except PSUTIL_ERRORS:  # process metrics are optional in snapshots
        logger.warning("Failed to read memory usage for pid %s", pid)
        rss_mb = None
    return {"pid": pid, "rss_mb": rss_mb}


def snapshot(registry: GroupRegistry) -> Dict[str, Any]:
    """Plain-data view of every group and its live members."""
    groups = []
    for group in registry.groups():
        members = group.members()
        groups.append(
            {
                "name": group.name,
                "count": len(members),
                "members": [handle.describe() for handle in members],
            }
        )
    return {
        "taken_at": time.time(),
        "process": _process_info(),
        "total": sum(entry["count"] for entry in groups),
        "groups": groups,
    }


def dumps_snapshot(registry: GroupRegistry) -> str:
    return orjson.dumps(snapshot(registry)).decode("utf-8")
