"""Registry reporting and logging utilities."""

import logging
import time
from typing import List

from .registry import RegistryGroup

logger = logging.getLogger(__name__)


class RegistryReporter:
    """Logs summaries of live registry groups."""

    def __init__(self, log_level: int):
        """
        Initialize registry reporter.

        Args:
            log_level: Logging level for the summary line
        """
        self._log_level = log_level

    def log_summary(self, groups: List[RegistryGroup]) -> int:
        """
        Log counts per group and details of outstanding resources.

        Args:
            groups: Groups to report on

        Returns:
            Total number of live tracked resources
        """
        live_groups = [group for group in groups if group.count()]
        total = sum(group.count() for group in live_groups)

        logger.log(
            self._log_level,
            f"📊 Tracked resources: {total} live across {len(live_groups)} of {len(groups)} groups",
        )

        now = time.time()
        for group in live_groups:
            logger.warning(f"⚠️  {group.name}: {group.count()} still tracked")
            for handle in group.members():
                age = now - handle.tracked_at if handle.tracked_at else 0.0
                origin = handle.acquisition_stack[0] if handle.acquisition_stack else None
                where = f"{origin.filename}:{origin.lineno}" if origin else "unknown location"
                logger.warning(f"  - {handle.type_name} age={age:.1f}s tracked at {where}")
        return total
