"""
Shared fixtures for orchestrator tests.

RecordingLifecycle appends ("start", name) / ("stop", name) to a
shared call log so tests can assert ordering across components.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from core.clock import ClockFactory
from orchestrator.lifecycle import DependencyContext, Lifecycle


class RecordingLifecycle(Lifecycle):
    """Lifecycle double that records every call."""

    def __init__(
        self,
        name: str,
        calls: List[Tuple[str, str]],
        result: Any = None,
        start_error: Optional[Exception] = None,
        stop_error: Optional[Exception] = None,
    ):
        self.name = name
        self.calls = calls
        self.result = result
        self.start_error = start_error
        self.stop_error = stop_error
        self.start_count = 0
        self.stop_count = 0
        self.start_contexts: List[Dict[str, Any]] = []
        self.stop_contexts: List[Dict[str, Any]] = []

    def start(self, context: DependencyContext) -> Any:
        self.calls.append(("start", self.name))
        self.start_count += 1
        self.start_contexts.append(dict(context))
        if self.start_error is not None:
            raise self.start_error
        return self if self.result is None else self.result

    def stop(self, context: DependencyContext) -> None:
        self.calls.append(("stop", self.name))
        self.stop_count += 1
        self.stop_contexts.append(dict(context))
        if self.stop_error is not None:
            raise self.stop_error


@pytest.fixture
def calls() -> List[Tuple[str, str]]:
    """Shared call log."""
    return []


@pytest.fixture
def make_lifecycle(calls) -> Callable[..., RecordingLifecycle]:
    """Factory for recording lifecycles bound to the shared call log."""
    def factory(name: str, **kwargs) -> RecordingLifecycle:
        return RecordingLifecycle(name, calls, **kwargs)
    return factory


@pytest.fixture(autouse=True)
def reset_clock():
    """Every test starts and ends on the system clock."""
    ClockFactory.reset()
    yield
    ClockFactory.reset()
