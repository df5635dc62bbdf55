"""
Orchestrator - Dependency Graph.

============================================================
RESPONSIBILITY
============================================================
Validates component dependencies and resolves start order.

- Detect cycles among registered components
- Reject dependencies on unregistered components
- Produce a deterministic topological order
- Produce the matching shutdown order

============================================================
ORDERING
============================================================
Kahn's algorithm with the ready set sorted by name before every
pick, so components of equal rank always come out alphabetically.
The order is recomputed on every call; nothing is cached.

============================================================
"""

import logging
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from core.exceptions import CyclicDependencyError, GraphValidationError

from .component import Component


logger = logging.getLogger(__name__)


# ============================================================
# DEPENDENCY GRAPH
# ============================================================

class DependencyGraph:
    """
    Directed graph of component -> dependencies.

    Nodes are exactly the registered component names; edges may point
    at names that were never registered, which is an error only when
    an order is requested.
    """

    def __init__(self):
        self._edges: Dict[str, Tuple[str, ...]] = {}  # node -> dependencies

    @classmethod
    def from_components(cls, components: Mapping[str, Component]) -> "DependencyGraph":
        """Build a graph from a name -> Component mapping."""
        graph = cls()
        for name, component in components.items():
            graph.add_node(name, component.get_dependencies())
        return graph

    def add_node(self, name: str, dependencies: Iterable[str] = ()) -> None:
        """Add a node with its dependencies."""
        self._edges[name] = tuple(dependencies)

    def get_missing_dependencies(self) -> List[Tuple[str, str]]:
        """List (component, dependency) pairs whose dependency is not registered."""
        missing = []
        for name in sorted(self._edges):
            for dep in self._edges[name]:
                if dep not in self._edges:
                    missing.append((name, dep))
        return missing

    # --------------------------------------------------------
    # Validation
    # --------------------------------------------------------

    def check_cycles(self) -> None:
        """
        Depth-first cycle check.

        Edges to unregistered names are skipped here; get_startup_order()
        reports them.

        Raises:
            CyclicDependencyError: Naming the root whose traversal hit a back-edge
        """
        visited: Set[str] = set()
        on_path: Set[str] = set()

        def is_cyclic(node: str) -> bool:
            visited.add(node)
            on_path.add(node)

            for dep in self._edges[node]:
                if dep not in self._edges:
                    continue
                if dep not in visited:
                    if is_cyclic(dep):
                        return True
                elif dep in on_path:
                    return True

            on_path.discard(node)
            return False

        for name in sorted(self._edges):
            if name not in visited and is_cyclic(name):
                raise CyclicDependencyError(
                    message=f"cyclic dependency detected involving component {name}",
                    component=name,
                )

    # --------------------------------------------------------
    # Ordering
    # --------------------------------------------------------

    def get_startup_order(self) -> List[str]:
        """
        Get nodes in startup order (dependencies first).

        Returns:
            List of component names

        Raises:
            GraphValidationError: If a dependency is not registered
            CyclicDependencyError: If not every node could be ordered
        """
        dependents: Dict[str, List[str]] = {name: [] for name in self._edges}
        in_degree: Dict[str, int] = {name: 0 for name in self._edges}

        for name in sorted(self._edges):
            for dep in self._edges[name]:
                if dep not in self._edges:
                    raise GraphValidationError(
                        message=f"dependency {dep} not found for component {name}",
                        component=name,
                        dependency=dep,
                    )
                dependents[dep].append(name)
                in_degree[name] += 1

        ready = [name for name, degree in in_degree.items() if degree == 0]
        order: List[str] = []

        while ready:
            ready.sort()
            current = ready.pop(0)
            order.append(current)

            for dependent in dependents[current]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    ready.append(dependent)

        if len(order) != len(self._edges):
            raise CyclicDependencyError()

        logger.debug(f"Resolved startup order: {', '.join(order)}")
        return order

    def get_shutdown_order(self) -> List[str]:
        """Get nodes in shutdown order (reverse of startup)."""
        return list(reversed(self.get_startup_order()))


__all__ = [
    "DependencyGraph",
]
