"""Dependency factory for Tracker."""

from dataclasses import dataclass

from ..config import TrackerSettings
from .failure_strategies import FailureStrategy, PanicStrategy
from .registry import GroupRegistry
from .reporter import RegistryReporter


@dataclass
class TrackerDependencies:
    """Dependencies for Tracker."""

    registry: GroupRegistry
    reporter: RegistryReporter
    default_strategy: FailureStrategy


class TrackerDependenciesFactory:
    """Factory for creating Tracker dependencies."""

    @staticmethod
    def create(settings: TrackerSettings) -> TrackerDependencies:
        """
        Create all dependencies for Tracker.

        Args:
            settings: Tracker settings

        Returns:
            TrackerDependencies instance
        """
        registry = GroupRegistry()
        reporter = RegistryReporter(settings.log_level)
        default_strategy = PanicStrategy(registry, abort=settings.abort_on_leak)

        return TrackerDependencies(
            registry=registry,
            reporter=reporter,
            default_strategy=default_strategy,
        )
