"""
Orchestrator - Component Record.

============================================================
RESPONSIBILITY
============================================================
Wraps one lifecycle implementation with its name, declared
dependencies and started/result state.

- Decides whether a start/stop call is a no-op
- Times start calls for observability
- Wraps lifecycle failures with the component name
- Serializes its own start/stop under a private lock

============================================================
"""

import logging
import threading
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from core.clock import ClockFactory
from core.exceptions import ComponentStartError, ComponentStopError, wrap_exception

from .lifecycle import DependencyContext, Lifecycle


logger = logging.getLogger(__name__)


class Component:
    """
    A named lifecycle plus the names of the components it requires.

    The orchestrator drives records sequentially; the lock only keeps
    started/result consistent for callers that bypass it.
    """

    def __init__(self, name: str, lifecycle: Lifecycle, dependencies: Tuple[str, ...] = ()):
        if not name:
            raise ValueError("component name must not be empty")
        if not isinstance(lifecycle, Lifecycle):
            raise TypeError(
                f"component {name!r} lifecycle must implement Lifecycle, "
                f"got {type(lifecycle).__name__}"
            )

        self._name = name
        self._lifecycle = lifecycle
        self._dependencies = tuple(dependencies)
        self._result: Any = None
        self._started = False
        self._started_at: Optional[datetime] = None
        self._stopped_at: Optional[datetime] = None
        self._last_start_duration: Optional[float] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return (
            f"Component(name={self._name!r}, dependencies={list(self._dependencies)!r}, "
            f"started={self._started})"
        )

    # --------------------------------------------------------
    # Properties
    # --------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    @property
    def result(self) -> Any:
        """Result of the last successful start, None before start."""
        with self._lock:
            return self._result

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def stopped_at(self) -> Optional[datetime]:
        return self._stopped_at

    @property
    def last_start_duration(self) -> Optional[float]:
        """Seconds the last successful start call took."""
        return self._last_start_duration

    def get_dependencies(self) -> Tuple[str, ...]:
        return self._dependencies

    def is_started(self) -> bool:
        with self._lock:
            return self._started

    # --------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------

    def start(self, context: DependencyContext) -> Any:
        """
        Start the wrapped lifecycle.

        Args:
            context: Results of this component's dependencies

        Returns:
            The lifecycle's result (the cached one if already started)

        Raises:
            ComponentStartError: If the lifecycle's start raised
        """
        with self._lock:
            if self._started:
                logger.debug(f"Component {self._name} already started")
                return self._result

            clock = ClockFactory.get_clock()
            begin = clock.timestamp()

            try:
                result = self._lifecycle.start(context)
            except Exception as e:
                error = wrap_exception(
                    e,
                    ComponentStartError,
                    message=f"failed to start component {self._name}: {e}",
                    component=self._name,
                )
                logger.error(f"{error.to_log_format()} | elapsed={clock.elapsed_since(begin):.3f}s")
                raise error from e

            elapsed = clock.elapsed_since(begin)
            self._result = result
            self._started = True
            self._started_at = clock.now()
            self._last_start_duration = elapsed

            logger.info(f"Component {self._name} started in {elapsed:.3f}s")
            return result

    def stop(self, context: DependencyContext) -> None:
        """
        Stop the wrapped lifecycle.

        A failed stop leaves the record started with its result intact.

        Args:
            context: Every result produced by the running system

        Raises:
            ComponentStopError: If the lifecycle's stop raised
        """
        with self._lock:
            if not self._started:
                logger.debug(f"Component {self._name} not started, nothing to stop")
                return

            try:
                self._lifecycle.stop(context)
            except Exception as e:
                error = wrap_exception(
                    e,
                    ComponentStopError,
                    message=f"failed to stop component {self._name}: {e}",
                    component=self._name,
                )
                logger.error(error.to_log_format())
                raise error from e

            self._started = False
            self._stopped_at = ClockFactory.get_clock().now()
            logger.info(f"Component {self._name} stopped")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record state for status summaries."""
        with self._lock:
            return {
                "name": self._name,
                "lifecycle": type(self._lifecycle).__name__,
                "dependencies": list(self._dependencies),
                "started": self._started,
                "started_at": self._started_at.isoformat() if self._started_at else None,
                "stopped_at": self._stopped_at.isoformat() if self._stopped_at else None,
                "last_start_duration": self._last_start_duration,
            }


def define(name: str, lifecycle: Lifecycle, *dependencies: str) -> Component:
    """
    Declare a component.

    Args:
        name: Unique component name
        lifecycle: Implementation of the start/stop contract
        *dependencies: Names of components that must start first

    Returns:
        A new, un-started Component
    """
    return Component(name, lifecycle, dependencies)


__all__ = [
    "Component",
    "define",
]
