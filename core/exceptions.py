"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Errors raised by the component orchestrator.

- Graph errors are raised before any component is touched
- Component errors name the component whose start/stop failed
- Every error renders as one structured log line

============================================================
EXCEPTION HIERARCHY
============================================================
OrchestratorException (base)
├── ConfigurationError
│   └── InvalidConfigError
├── DependencyGraphError
│   ├── GraphValidationError
│   └── CyclicDependencyError
└── ComponentError
    ├── ComponentStartError
    └── ComponentStopError

============================================================
"""

from enum import Enum
from typing import Any, Dict, Optional


class Severity(Enum):
    """How loudly an error is logged."""

    MEDIUM = "medium"
    """System reached its target state with problems."""

    HIGH = "high"
    """System could not reach its target state."""


# ============================================================
# BASE EXCEPTION
# ============================================================

class OrchestratorException(Exception):
    """
    Base exception for all orchestrator errors.

    context holds the names involved (component, dependency, config
    key) and, for wrapped failures, the type and text of the cause.
    """

    severity: Severity = Severity.HIGH

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.context["cause_type"] = type(cause).__name__
            self.context["cause_message"] = str(cause)

    def to_log_format(self) -> str:
        """Single log line: severity, type, message, then key=value context."""
        parts = [f"[{self.severity.value.upper()}] {type(self).__name__}: {self.message}"]
        parts.extend(f"{key}={value}" for key, value in self.context.items())
        return " | ".join(parts)


def _named(**names: Optional[str]) -> Dict[str, str]:
    """Drop unset names so context only lists what is known."""
    return {key: value for key, value in names.items() if value}


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(OrchestratorException):
    """Settings could not be loaded or are out of range."""


class InvalidConfigError(ConfigurationError):
    """One setting has an unusable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid configuration for {key}: {reason}",
            context={"config_key": key, "actual_value": str(value)[:100]},
        )
        self.key = key
        self.reason = reason


# ============================================================
# DEPENDENCY GRAPH ERRORS
# ============================================================

class DependencyGraphError(OrchestratorException):
    """The declared graph cannot be ordered. No component has been touched."""


class GraphValidationError(DependencyGraphError):
    """A declared dependency does not name a registered component."""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        dependency: Optional[str] = None,
    ):
        super().__init__(message, context=_named(component=component, dependency=dependency))
        self.component = component
        self.dependency = dependency


class CyclicDependencyError(DependencyGraphError):
    """Declared dependencies form a loop."""

    def __init__(
        self,
        message: str = "cyclic dependency detected",
        component: Optional[str] = None,
    ):
        super().__init__(message, context=_named(component=component))
        self.component = component


# ============================================================
# COMPONENT ERRORS
# ============================================================

class ComponentError(OrchestratorException):
    """A single component's start or stop failed."""

    operation = ""

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        cause: Optional[BaseException] = None,
        **names: Optional[str],
    ):
        context = _named(component=component, operation=self.operation, **names)
        super().__init__(message, context=context, cause=cause)
        self.component = component


class ComponentStartError(ComponentError):
    """
    A component failed to start, or one of its dependencies was not
    started when its turn came.
    """

    operation = "start"

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        dependency: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, component=component, cause=cause, dependency=dependency)
        self.dependency = dependency


class ComponentStopError(ComponentError):
    """A component failed to stop. The rest of the shutdown still runs."""

    severity = Severity.MEDIUM
    operation = "stop"


# ============================================================
# EXCEPTION UTILITIES
# ============================================================

def wrap_exception(
    exc: BaseException,
    wrapper_class: type = OrchestratorException,
    message: Optional[str] = None,
    **kwargs,
) -> OrchestratorException:
    """Wrap a standard exception in an OrchestratorException."""
    msg = message or f"{type(exc).__name__}: {exc}"
    return wrapper_class(message=msg, cause=exc, **kwargs)


__all__ = [
    "Severity",
    "OrchestratorException",
    "ConfigurationError",
    "InvalidConfigError",
    "DependencyGraphError",
    "GraphValidationError",
    "CyclicDependencyError",
    "ComponentError",
    "ComponentStartError",
    "ComponentStopError",
    "wrap_exception",
]
