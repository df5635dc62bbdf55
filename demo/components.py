"""
Demo - Components.

============================================================
RESPONSIBILITY
============================================================
Concrete components used by the demo application.

- config       : listening address for the HTTP server
- app_routes   : FastAPI router with the demo endpoints
- http_server  : uvicorn server running the app in a background thread

http_server depends on config and app_routes and reads their
results from its dependency context.

============================================================
"""

import logging
import threading
import time
from typing import Any, Optional, Type, TypeVar

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse

from orchestrator.lifecycle import DependencyContext, Lifecycle, SimpleLifecycle


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PORT = 3000
MOCK_PORT = 4000


def _require(context: DependencyContext, key: str, expected: Type[T]) -> T:
    """Fetch a dependency result and check its type."""
    if key not in context:
        raise LookupError(f"{key} dependency not found")
    value = context[key]
    if not isinstance(value, expected):
        raise TypeError(f"invalid {key} type: {type(value).__name__}")
    return value


# ============================================================
# CONFIG
# ============================================================

class ConfigComponent(SimpleLifecycle):
    """Provides the address the HTTP server listens on."""

    def __init__(self, host: str = "127.0.0.1", port: int = DEFAULT_PORT):
        self._configured_host = host
        self._configured_port = port
        self.host: Optional[str] = None
        self.port: Optional[int] = None

    def start(self, context: DependencyContext) -> "ConfigComponent":
        self.host = self._configured_host
        self.port = self._configured_port
        logger.info(f"Configuration loaded: {self.host}:{self.port}")
        return self


class ConfigMock(ConfigComponent):
    """Config with a fixed test port."""

    def __init__(self):
        super().__init__(host="127.0.0.1", port=MOCK_PORT)


# ============================================================
# ROUTES
# ============================================================

class AppRoutes(SimpleLifecycle):
    """Builds the application's routes."""

    def __init__(self):
        self.router: Optional[APIRouter] = None

    def start(self, context: DependencyContext) -> "AppRoutes":
        router = APIRouter()

        @router.get("/", response_class=PlainTextResponse)
        def hello() -> str:
            return "Hello World!"

        self.router = router
        logger.info("App routes configured")
        return self

    def setup_routes(self, app: FastAPI) -> None:
        """Mount the routes on an application."""
        if self.router is None:
            raise RuntimeError("app routes not started")
        app.include_router(self.router)


# ============================================================
# HTTP SERVER
# ============================================================

class HttpServer(Lifecycle):
    """
    Serves the routes from app_routes on the address from config.

    uvicorn runs in a daemon thread; start() returns once the server
    is accepting connections, stop() asks it to exit and joins.
    """

    def __init__(self, startup_timeout: float = 10.0, shutdown_timeout: float = 10.0):
        self._startup_timeout = startup_timeout
        self._shutdown_timeout = shutdown_timeout
        self.app: Optional[FastAPI] = None
        self.server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    def start(self, context: DependencyContext) -> "HttpServer":
        config = _require(context, "config", ConfigComponent)
        routes = _require(context, "app_routes", AppRoutes)

        app = FastAPI(title="Component Orchestrator Demo")
        routes.setup_routes(app)

        server = uvicorn.Server(
            uvicorn.Config(app, host=config.host, port=config.port, log_level="info")
        )
        thread = threading.Thread(target=server.run, name="http-server", daemon=True)
        thread.start()

        self._wait_until_started(server, thread, config)

        self.app = app
        self.server = server
        self._thread = thread

        logger.info(f"Example app listening on port {config.port}")
        return self

    def _wait_until_started(
        self,
        server: uvicorn.Server,
        thread: threading.Thread,
        config: ConfigComponent,
    ) -> None:
        deadline = time.monotonic() + self._startup_timeout
        while not server.started:
            if not thread.is_alive():
                raise RuntimeError(
                    f"HTTP server failed to start on {config.host}:{config.port}"
                )
            if time.monotonic() > deadline:
                server.should_exit = True
                raise TimeoutError(
                    f"HTTP server did not start within {self._startup_timeout}s"
                )
            time.sleep(0.05)

    def stop(self, context: DependencyContext) -> None:
        if self.server is None:
            return

        logger.info("HTTP server closing")
        self.server.should_exit = True

        if self._thread is not None:
            self._thread.join(timeout=self._shutdown_timeout)
            if self._thread.is_alive():
                raise TimeoutError(
                    f"HTTP server did not stop within {self._shutdown_timeout}s"
                )

        self.server = None
        self._thread = None


def describe(result: Any) -> str:
    """Short human-readable form of a component result for the demo banner."""
    if isinstance(result, ConfigComponent):
        return f"{result.host}:{result.port}"
    if isinstance(result, HttpServer):
        return "serving" if result.server is not None else "idle"
    return type(result).__name__


__all__ = [
    "ConfigComponent",
    "ConfigMock",
    "AppRoutes",
    "HttpServer",
    "describe",
]
