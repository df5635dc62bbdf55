"""
Orchestrator - CLI.

============================================================
RESPONSIBILITY
============================================================
Command-line interface for the demo component system.

- Provides argparse-based CLI
- Merges CLI flags over environment configuration
- Validates arguments before anything starts

============================================================
USAGE
============================================================
python app.py
python app.py --port 8080 --log-format json
python app.py --show-order

============================================================
"""

import argparse
import sys
from typing import List, Optional

from core.exceptions import DependencyGraphError

from .core import System
from .models import LOG_FORMATS, LOG_LEVELS, SystemConfig


# ============================================================
# CLI ARGUMENT PARSER
# ============================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="component-orchestrator",
        description="Start a set of components in dependency order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Components:
  config       - Listening address (no dependencies)
  app_routes   - HTTP routes (no dependencies)
  http_server  - HTTP server (depends on config, app_routes)

Examples:
  %(prog)s                          # Start everything, stop on Ctrl+C
  %(prog)s --port 8080              # Listen on another port
  %(prog)s --show-order             # Print start order and exit
        """
    )

    # --------------------------------------------------------
    # HTTP Options
    # --------------------------------------------------------
    http_group = parser.add_argument_group("HTTP Options")

    http_group.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind (default: $HTTP_HOST or 127.0.0.1)",
    )

    http_group.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Port to listen on (default: $HTTP_PORT or 3000)",
    )

    # --------------------------------------------------------
    # Logging Options
    # --------------------------------------------------------
    logging_group = parser.add_argument_group("Logging Options")

    logging_group.add_argument(
        "--log-level",
        type=str,
        choices=list(LOG_LEVELS),
        default=None,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )

    logging_group.add_argument(
        "--log-format",
        type=str,
        choices=list(LOG_FORMATS),
        default=None,
        help="Logging format (default: $LOG_FORMAT or text)",
    )

    # --------------------------------------------------------
    # Version/Info
    # --------------------------------------------------------
    parser.add_argument(
        "--version", "-v",
        action="version",
        version="%(prog)s 1.0.0",
    )

    parser.add_argument(
        "--show-order",
        action="store_true",
        help="Show component start and stop order and exit",
    )

    return parser


# ============================================================
# CLI VALIDATION
# ============================================================

def validate_args(args: argparse.Namespace) -> List[str]:
    """
    Validate CLI arguments.

    Args:
        args: Parsed arguments

    Returns:
        List of validation errors
    """
    errors = []

    if args.port is not None and not 0 < args.port < 65536:
        errors.append("--port must be between 1 and 65535")

    if args.host is not None and not args.host.strip():
        errors.append("--host must not be empty")

    return errors


# ============================================================
# CLI CONFIGURATION BUILDER
# ============================================================

def build_config(
    args: argparse.Namespace,
    base: Optional[SystemConfig] = None,
) -> SystemConfig:
    """
    Build configuration from CLI arguments.

    Flags left unset fall back to the base configuration.

    Args:
        args: Parsed arguments
        base: Configuration to override (default: from environment)

    Returns:
        SystemConfig instance
    """
    base = base or SystemConfig.from_env()
    return SystemConfig(
        log_level=args.log_level or base.log_level,
        log_format=args.log_format or base.log_format,
        correlation_id_prefix=base.correlation_id_prefix,
        http_host=args.host or base.http_host,
        http_port=args.port if args.port is not None else base.http_port,
    )


# ============================================================
# SHOW ORDER
# ============================================================

def show_order(system: System) -> int:
    """
    Print start and stop order for a system.

    Returns:
        Exit code (1 if the graph is invalid)
    """
    try:
        order = system.get_startup_order()
    except DependencyGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\nStart order:")
    print("=" * 60)
    for i, name in enumerate(order, 1):
        deps = ", ".join(system.components[name].get_dependencies()) or "-"
        print(f"  {i:2d}. {name:30s} <- {deps}")

    print("\nStop order:")
    print("=" * 60)
    for i, name in enumerate(reversed(order), 1):
        print(f"  {i:2d}. {name}")

    print()
    return 0


def print_banner(config: SystemConfig) -> None:
    """Print startup banner."""
    print()
    print("=" * 60)
    print("  COMPONENT ORCHESTRATOR")
    print("=" * 60)
    print(f"  Listen:     {config.http_host}:{config.http_port}")
    print(f"  Log Level:  {config.log_level}")
    print(f"  Log Format: {config.log_format}")
    print("=" * 60)
    print()


__all__ = [
    "create_parser",
    "validate_args",
    "build_config",
    "show_order",
    "print_banner",
]
