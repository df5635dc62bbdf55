"""
Core Module Package.

This package contains the core infrastructure shared by the
orchestrator and the components it drives.

Components:
- clock: Testable time abstraction used for lifecycle timing
- exceptions: Custom exception hierarchy
"""

from .clock import ClockFactory, ClockProtocol, ManualClock, SystemClock
from .exceptions import (
    ComponentError,
    ComponentStartError,
    ComponentStopError,
    ConfigurationError,
    CyclicDependencyError,
    DependencyGraphError,
    GraphValidationError,
    InvalidConfigError,
    OrchestratorException,
    Severity,
)

__all__ = [
    "ClockFactory",
    "ClockProtocol",
    "ManualClock",
    "SystemClock",
    "OrchestratorException",
    "Severity",
    "ConfigurationError",
    "InvalidConfigError",
    "DependencyGraphError",
    "GraphValidationError",
    "CyclicDependencyError",
    "ComponentError",
    "ComponentStartError",
    "ComponentStopError",
]
