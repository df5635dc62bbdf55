"""
Orchestrator Package - Component Lifecycle Layer.

============================================================
PACKAGE OVERVIEW
============================================================
Declares named components with dependencies on each other,
starts them in dependency order and stops them in reverse order.

============================================================
CORE PRINCIPLES
============================================================
1. The orchestrator has NO business logic
2. A component never starts before its dependencies
3. A component never stops before its dependents
4. The graph is validated before anything is touched
5. Startup failures are not rolled back; stop failures never
   prevent the remaining stops

============================================================
ARCHITECTURE
============================================================

    +-----------------------------------------------------+
    |                        System                       |
    |-----------------------------------------------------|
    |  Lifecycle       |  start/stop contract             |
    |  Component       |  named record, started + result  |
    |  DependencyGraph |  cycle check, Kahn ordering      |
    |  SystemConfig    |  logging / HTTP settings         |
    |  CLI             |  Command-line interface          |
    +-----------------------------------------------------+

============================================================
QUICK START
============================================================
Programmatic usage::

    from orchestrator import System, SimpleLifecycle, define

    class Database(SimpleLifecycle):
        def start(self, context):
            return connect()

    class Api(SimpleLifecycle):
        def start(self, context):
            return build_api(context["database"])

    system = System({
        "database": define("database", Database()),
        "api": define("api", Api(), "database"),
    })

    system.start()
    ...
    system.stop()

============================================================
EXPORTS
============================================================
"""

# ============================================================
# Lifecycle
# ============================================================
from orchestrator.lifecycle import (
    DependencyContext,
    Lifecycle,
    SimpleLifecycle,
)

# ============================================================
# Component
# ============================================================
from orchestrator.component import (
    Component,
    define,
)

# ============================================================
# Models
# ============================================================
from orchestrator.models import (
    SystemState,
    SystemConfig,
)

# ============================================================
# Registry
# ============================================================
from orchestrator.registry import (
    DependencyGraph,
)

# ============================================================
# Core
# ============================================================
from orchestrator.core import (
    System,
    create_system,
    setup_logging,
)

# ============================================================
# Package metadata
# ============================================================
__version__ = "1.0.0"

__all__ = [
    # Lifecycle
    "DependencyContext",
    "Lifecycle",
    "SimpleLifecycle",

    # Component
    "Component",
    "define",

    # Models
    "SystemState",
    "SystemConfig",

    # Registry
    "DependencyGraph",

    # Core
    "System",
    "create_system",
    "setup_logging",
]
