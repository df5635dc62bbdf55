#!/usr/bin/env python3
"""
Component Orchestrator - Demo Application Entry Point.

============================================================
SINGLE ENTRYPOINT
============================================================
Wires the demo components into one System, starts them in
dependency order, waits for SIGINT/SIGTERM, stops them in
reverse order.

Exit codes:
    0 - started and stopped cleanly
    1 - invalid arguments, start failure or stop failure

============================================================
USAGE
============================================================
Direct execution:
    python app.py
    python app.py --port 8080 --log-format json

Environment-based configuration (also read from .env):
    HTTP_PORT=8080 LOG_LEVEL=DEBUG python app.py

============================================================
"""

import logging
import signal
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.absolute()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

from core.exceptions import ComponentStopError, ConfigurationError, OrchestratorException
from demo.components import AppRoutes, ConfigComponent, HttpServer, describe
from orchestrator.cli import build_config, create_parser, print_banner, show_order, validate_args
from orchestrator.component import Component, define
from orchestrator.core import System, setup_logging
from orchestrator.models import SystemConfig


logger = logging.getLogger(__name__)


# ============================================================
# COMPONENT WIRING
# ============================================================

def wire_components(config: SystemConfig) -> Dict[str, Component]:
    """
    Declare the demo components and their dependencies.

    Args:
        config: Runtime configuration

    Returns:
        name -> Component mapping for System
    """
    config_component = define(
        "config",
        ConfigComponent(host=config.http_host, port=config.http_port),
    )
    app_routes = define("app_routes", AppRoutes())
    http_server = define(
        "http_server",
        HttpServer(),
        app_routes.name,
        config_component.name,
    )

    return {
        config_component.name: config_component,
        app_routes.name: app_routes,
        http_server.name: http_server,
    }


# ============================================================
# SIGNALS
# ============================================================

def wait_for_shutdown(stop_event: threading.Event) -> str:
    """
    Block until SIGINT/SIGTERM arrives or stop_event is set.

    Signal handlers are only installed from the main thread and are
    restored before returning.

    Returns:
        Name of the signal received, or "shutdown" if the event was set directly
    """
    trigger = {"reason": "shutdown"}

    def signal_handler(signum: int, frame) -> None:
        trigger["reason"] = signal.Signals(signum).name
        stop_event.set()

    original_handlers = {}
    if threading.current_thread() is threading.main_thread():
        for sig in (signal.SIGINT, signal.SIGTERM):
            original_handlers[sig] = signal.getsignal(sig)
            signal.signal(sig, signal_handler)

    try:
        while not stop_event.wait(timeout=0.5):
            pass
    finally:
        for sig, handler in original_handlers.items():
            signal.signal(sig, handler)

    return trigger["reason"]


# ============================================================
# RUN
# ============================================================

def run(system: System, stop_event: Optional[threading.Event] = None) -> int:
    """
    Start the system, wait for shutdown, stop the system.

    Args:
        system: System to drive
        stop_event: Event that ends the wait (default: signals only)

    Returns:
        Exit code
    """
    stop_event = stop_event or threading.Event()

    logger.info("Starting system...")
    try:
        system.start()
    except OrchestratorException as e:
        logger.error(f"Failed to start system: {e.to_log_format()}")
        return 1
    logger.info("System started successfully")

    for name, result in sorted(system.get_context().items()):
        logger.info(f"  {name:<15} {describe(result)}")

    reason = wait_for_shutdown(stop_event)
    logger.info(f"{reason} signal received, shutting down...")

    try:
        system.stop()
    except ComponentStopError as e:
        logger.error(f"Error during system shutdown: {e.to_log_format()}")
        return 1

    logger.info("System stopped successfully")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    errors = validate_args(args)
    try:
        config = build_config(args)
    except ConfigurationError as e:
        errors.append(e.message)
    else:
        errors.extend(config.validate())
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1

    system = System(wire_components(config))

    if args.show_order:
        return show_order(system)

    correlation_id = (
        f"{config.correlation_id_prefix}_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
    )
    setup_logging(
        level=config.log_level,
        log_format=config.log_format,
        correlation_id=correlation_id,
    )

    print_banner(config)
    return run(system)


if __name__ == "__main__":
    sys.exit(main())
