"""
Orchestrator - Core.

============================================================
RESPONSIBILITY
============================================================
The component system: brings a fixed set of components up in
dependency order and takes them down in reverse order.

- Validates the graph before touching any component
- Hands each component only its dependencies' results
- Aborts startup on the first failure, without rollback
- Stops every component even when some stops fail

============================================================
ARCHITECTURAL POSITION
============================================================
- The system has NO business logic
- Components are supplied by the caller, never registered globally
- Several systems can coexist in one process

============================================================
"""

import json
import logging
import sys
import threading
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from core.clock import ClockFactory
from core.exceptions import (
    ComponentStartError,
    ComponentStopError,
    DependencyGraphError,
    GraphValidationError,
)

from .component import Component
from .models import SystemState
from .registry import DependencyGraph


logger = logging.getLogger(__name__)


# ============================================================
# LOGGING SETUP
# ============================================================

def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    correlation_id: Optional[str] = None,
) -> logging.Logger:
    """
    Set up structured logging.

    Args:
        level: Log level
        log_format: Output format (json or text)
        correlation_id: Correlation ID for tracing

    Returns:
        Configured logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_format == "json":
        formatter = logging.Formatter(
            json.dumps({
                "timestamp": "%(asctime)s",
                "level": "%(levelname)s",
                "logger": "%(name)s",
                "message": "%(message)s",
                "correlation_id": correlation_id or "",
            })
        )
    else:
        formatter = logging.Formatter(
            f"%(asctime)s | %(levelname)-8s | %(name)s | {correlation_id or ''} | %(message)s"
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    return logging.getLogger("orchestrator")


# ============================================================
# SYSTEM
# ============================================================

class System:
    """
    Starts and stops a fixed set of components.

    start(), stop(), get_context(), is_started() and get_status_summary()
    serialize on one lock; start() and stop() hold it for the whole walk,
    so a slow component blocks every other caller.
    """

    def __init__(self, components: Mapping[str, Component]):
        """
        Initialize system.

        Args:
            components: name -> Component; copied and frozen for the run
        """
        self._components: Dict[str, Component] = dict(components)
        self._context: Dict[str, Any] = {}
        self._state = SystemState.UNINITIALIZED
        self._lock = threading.Lock()

    # --------------------------------------------------------
    # Properties
    # --------------------------------------------------------

    @property
    def state(self) -> SystemState:
        return self._state

    def is_started(self) -> bool:
        with self._lock:
            return self._state.is_running

    @property
    def components(self) -> Mapping[str, Component]:
        return MappingProxyType(self._components)

    def _validated_graph(self) -> DependencyGraph:
        graph = DependencyGraph.from_components(self._components)
        graph.check_cycles()
        return graph

    def get_startup_order(self) -> List[str]:
        """
        Compute the start order without touching any component.

        Raises:
            CyclicDependencyError: If the dependencies form a loop
            GraphValidationError: If a dependency is not registered
        """
        return self._validated_graph().get_startup_order()

    def get_shutdown_order(self) -> List[str]:
        """Compute the stop order (reverse of the start order)."""
        return self._validated_graph().get_shutdown_order()

    # --------------------------------------------------------
    # Lifecycle
    # --------------------------------------------------------

    def start(self) -> None:
        """
        Start every component in dependency order.

        A second call while running is a no-op. On failure, components
        started earlier in the walk stay started.

        Raises:
            CyclicDependencyError: Before any component is started
            GraphValidationError: Before any component is started
            ComponentStartError: When a component fails to start
        """
        with self._lock:
            if self._state.is_running:
                logger.debug("System already started")
                return

            clock = ClockFactory.get_clock()
            begin = clock.timestamp()

            logger.info(f"Starting system with {len(self._components)} components")

            try:
                order = self.get_startup_order()
            except DependencyGraphError as e:
                logger.error(e.to_log_format())
                raise

            for name in order:
                component = self._components[name]

                try:
                    result = component.start(self._dependency_context(name, component))
                except ComponentStartError:
                    logger.error(f"Startup aborted at component {name}")
                    raise

                self._context[name] = result

            self._state = SystemState.RUNNING
            logger.info(
                f"Total system initialization time: {clock.elapsed_since(begin):.3f}s"
            )

    def _dependency_context(self, name: str, component: Component) -> Mapping[str, Any]:
        """Collect the results of a component's dependencies, all of which must be started."""
        context: Dict[str, Any] = {}

        for dep in component.get_dependencies():
            dep_component = self._components.get(dep)
            if dep_component is None or not dep_component.is_started():
                problem = "not found" if dep_component is None else "not started"
                error = ComponentStartError(
                    message=f"dependency {dep} {problem} for component {name}",
                    component=name,
                    dependency=dep,
                )
                logger.error(error.to_log_format())
                raise error
            context[dep] = dep_component.result

        return MappingProxyType(context)

    def stop(self) -> None:
        """
        Stop every component in reverse dependency order.

        Each stop receives every result the system holds. A failing stop
        does not prevent the remaining ones; the system is marked stopped
        once the walk completes.

        Raises:
            ComponentStopError: The last stop failure, after the full walk
        """
        with self._lock:
            if not self._state.is_running:
                logger.debug("System not started, nothing to stop")
                return

            order = self.get_shutdown_order()
            context = MappingProxyType(dict(self._context))
            last_error: Optional[ComponentStopError] = None

            logger.info(f"Stopping system with {len(order)} components")

            for name in order:
                try:
                    self._components[name].stop(context)
                except ComponentStopError as e:
                    logger.warning(f"Shutdown continues past component {name}")
                    last_error = e

            self._state = SystemState.STOPPED

            if last_error is not None:
                logger.warning("System stopped with errors")
                raise last_error

            logger.info("System stopped")

    def get_context(self) -> Dict[str, Any]:
        """Return a copy of every result produced so far, keyed by component name."""
        with self._lock:
            return dict(self._context)

    # --------------------------------------------------------
    # Status
    # --------------------------------------------------------

    def get_status_summary(self) -> Dict[str, Any]:
        """Get summary of the system and every component."""
        graph = DependencyGraph.from_components(self._components)

        with self._lock:
            state = self._state
            components = [self._components[name].to_dict() for name in sorted(self._components)]

        return {
            "state": state.value,
            "total_components": len(components),
            "started_components": sum(1 for c in components if c["started"]),
            "missing_dependencies": [
                {"component": name, "dependency": dep}
                for name, dep in graph.get_missing_dependencies()
            ],
            "components": components,
        }


def create_system(*components: Component) -> System:
    """
    Build a system from component records keyed by their own names.

    Raises:
        GraphValidationError: If two records share a name
    """
    mapping: Dict[str, Component] = {}
    for component in components:
        if component.name in mapping:
            raise GraphValidationError(
                message=f"component {component.name} defined more than once",
                component=component.name,
            )
        mapping[component.name] = component
    return System(mapping)


# ============================================================
# EXPORTS
# ============================================================

__all__ = [
    "System",
    "create_system",
    "setup_logging",
]
