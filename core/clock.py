"""
Core Module - Lifecycle Clock.

============================================================
RESPONSIBILITY
============================================================
Time source for component start timing.

- Start durations are measured with timestamp()
- started_at / stopped_at stamps come from now()
- Tests install a ManualClock so durations are exact

============================================================
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional
import threading
import time


# ============================================================
# CLOCK PROTOCOL
# ============================================================

class ClockProtocol(ABC):
    """Wall time for stamps, a monotonic counter for durations."""

    @abstractmethod
    def now(self) -> datetime:
        """Current time, timezone-aware UTC."""

    @abstractmethod
    def timestamp(self) -> float:
        """Seconds on a counter that never goes backwards."""

    def elapsed_since(self, start: float) -> float:
        """Seconds between an earlier timestamp() and now."""
        return max(0.0, self.timestamp() - start)


class SystemClock(ClockProtocol):
    """Real time: UTC wall clock plus time.monotonic()."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def timestamp(self) -> float:
        return time.monotonic()


class ManualClock(ClockProtocol):
    """
    Clock that only moves when told to.

    timestamp() counts seconds advanced since construction; now() is
    the start time shifted by the same amount.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._origin = start or datetime.now(timezone.utc)
        self._offset = 0.0
        self._lock = threading.Lock()

    def now(self) -> datetime:
        with self._lock:
            return self._origin + timedelta(seconds=self._offset)

    def timestamp(self) -> float:
        with self._lock:
            return self._offset

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        with self._lock:
            self._offset += seconds


# ============================================================
# CLOCK FACTORY
# ============================================================

class ClockFactory:
    """Process-wide clock used by component records."""

    _active: ClockProtocol = SystemClock()
    _lock = threading.Lock()

    @classmethod
    def get_clock(cls) -> ClockProtocol:
        with cls._lock:
            return cls._active

    @classmethod
    def set_clock(cls, clock: ClockProtocol) -> None:
        with cls._lock:
            cls._active = clock

    @classmethod
    def reset(cls) -> None:
        cls.set_clock(SystemClock())

    @classmethod
    @contextmanager
    def use_mock(cls, start: Optional[datetime] = None) -> Iterator[ManualClock]:
        """Install a ManualClock for the duration of the block."""
        previous = cls.get_clock()
        manual = ManualClock(start)
        cls.set_clock(manual)
        try:
            yield manual
        finally:
            cls.set_clock(previous)


__all__ = [
    "ClockProtocol",
    "SystemClock",
    "ManualClock",
    "ClockFactory",
]
