"""
Orchestrator - Lifecycle Contract.

============================================================
RESPONSIBILITY
============================================================
Defines the two-operation contract every component implements.

- start(context) returns the component's result or raises
- stop(context) releases resources or raises

The context handed to start holds only the results of the
component's declared dependencies. The context handed to stop
holds every result the system has produced.

============================================================
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping


DependencyContext = Mapping[str, Any]
"""Read-only mapping of component name -> result produced by its start."""


class Lifecycle(ABC):
    """Abstract base for anything the orchestrator can start and stop."""

    @abstractmethod
    def start(self, context: DependencyContext) -> Any:
        """
        Start the component.

        Args:
            context: Results of this component's declared dependencies

        Returns:
            The component's result, made available to its dependents
        """

    @abstractmethod
    def stop(self, context: DependencyContext) -> None:
        """
        Stop the component.

        Args:
            context: Every result produced by the running system
        """


class SimpleLifecycle(Lifecycle):
    """Base class for components that are their own result and hold nothing to release."""

    def start(self, context: DependencyContext) -> Any:
        """Return self."""
        return self

    def stop(self, context: DependencyContext) -> None:
        """No-op stop."""
        pass


__all__ = [
    "DependencyContext",
    "Lifecycle",
    "SimpleLifecycle",
]
