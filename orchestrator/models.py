"""
Orchestrator - Models.

============================================================
RESPONSIBILITY
============================================================
Defines data models for the component orchestrator.

- Whole-system lifecycle states
- Runtime configuration loaded from CLI or environment

============================================================
"""

from enum import Enum
from dataclasses import dataclass
from typing import List
import os

from core.exceptions import InvalidConfigError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")


# ============================================================
# SYSTEM STATE
# ============================================================

class SystemState(Enum):
    """
    Whole-system lifecycle state.

    UNINITIALIZED -> start() -> RUNNING -> stop() -> STOPPED
    start() from STOPPED goes back to RUNNING.
    """

    UNINITIALIZED = "uninitialized"
    """Constructed, start() never succeeded."""

    RUNNING = "running"
    """Every component started."""

    STOPPED = "stopped"
    """stop() walked every component."""

    @property
    def is_running(self) -> bool:
        return self == SystemState.RUNNING


# ============================================================
# SYSTEM CONFIGURATION
# ============================================================

@dataclass
class SystemConfig:
    """Configuration for the orchestrator entry point."""

    # Logging
    log_level: str = "INFO"
    """Logging level."""

    log_format: str = "text"
    """Log output format (json or text)."""

    correlation_id_prefix: str = "run"
    """Prefix for the correlation ID stamped on every log line."""

    # HTTP server component
    http_host: str = "127.0.0.1"
    """Interface the HTTP server component binds to."""

    http_port: int = 3000
    """Port the HTTP server component listens on."""

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """
        Load configuration from environment variables.

        Raises:
            InvalidConfigError: If HTTP_PORT is not an integer
        """
        raw_port = os.getenv("HTTP_PORT", "3000")
        try:
            http_port = int(raw_port)
        except ValueError as e:
            raise InvalidConfigError(
                key="HTTP_PORT", value=raw_port, reason="must be an integer"
            ) from e

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "text").lower(),
            correlation_id_prefix=os.getenv("CORRELATION_ID_PREFIX", "run"),
            http_host=os.getenv("HTTP_HOST", "127.0.0.1"),
            http_port=http_port,
        )

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.log_level not in LOG_LEVELS:
            errors.append(f"log_level must be one of {', '.join(LOG_LEVELS)}")

        if self.log_format not in LOG_FORMATS:
            errors.append(f"log_format must be one of {', '.join(LOG_FORMATS)}")

        if not 0 < self.http_port < 65536:
            errors.append("http_port must be between 1 and 65535")

        if not self.http_host:
            errors.append("http_host must not be empty")

        return errors

    def require_valid(self) -> None:
        """
        Raise if validation reports any errors.

        Raises:
            InvalidConfigError: If validate() reported anything
        """
        errors = self.validate()
        if errors:
            raise InvalidConfigError(
                key="system_config",
                value=self,
                reason="; ".join(errors),
            )


__all__ = [
    "LOG_LEVELS",
    "LOG_FORMATS",
    "SystemState",
    "SystemConfig",
]
