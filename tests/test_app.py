"""
Tests for the demo entry point.
"""

import threading
from unittest.mock import patch

import pytest

import app
from orchestrator.component import define
from orchestrator.core import System
from orchestrator.models import SystemConfig, SystemState


@pytest.fixture
def stop_event():
    event = threading.Event()
    event.set()
    return event


class TestWireComponents:
    """Test wire_components."""

    def test_declares_demo_graph(self):
        components = app.wire_components(SystemConfig(http_port=8080))

        assert set(components) == {"config", "app_routes", "http_server"}
        assert components["http_server"].get_dependencies() == ("app_routes", "config")
        assert components["config"].get_dependencies() == ()
        assert components["config"].lifecycle.start({}).port == 8080

    def test_start_order(self):
        system = System(app.wire_components(SystemConfig()))
        assert system.get_startup_order() == ["app_routes", "config", "http_server"]


class TestRun:
    """Test run with recording components."""

    def test_clean_run(self, make_lifecycle, calls, stop_event):
        system = System({
            "a": define("a", make_lifecycle("a")),
            "b": define("b", make_lifecycle("b"), "a"),
        })

        assert app.run(system, stop_event) == 0
        assert calls == [("start", "a"), ("start", "b"), ("stop", "b"), ("stop", "a")]
        assert system.state == SystemState.STOPPED

    def test_start_failure(self, make_lifecycle, calls, stop_event):
        system = System({
            "a": define("a", make_lifecycle("a", start_error=RuntimeError("boom"))),
        })

        assert app.run(system, stop_event) == 1
        assert calls == [("start", "a")]

    def test_graph_error(self, make_lifecycle, calls, stop_event):
        system = System({"a": define("a", make_lifecycle("a"), "missing")})

        assert app.run(system, stop_event) == 1
        assert calls == []

    def test_stop_failure(self, make_lifecycle, stop_event):
        system = System({
            "a": define("a", make_lifecycle("a", stop_error=RuntimeError("stuck"))),
        })

        assert app.run(system, stop_event) == 1
        assert system.state == SystemState.STOPPED


class TestWaitForShutdown:
    """Test wait_for_shutdown."""

    def test_returns_when_event_set(self, stop_event):
        assert app.wait_for_shutdown(stop_event) == "shutdown"

    def test_event_set_from_another_thread(self):
        event = threading.Event()
        timer = threading.Timer(0.1, event.set)
        timer.start()

        try:
            assert app.wait_for_shutdown(event) == "shutdown"
        finally:
            timer.cancel()


class TestMain:
    """Test main."""

    def test_invalid_port(self, capsys):
        assert app.main(["--port", "0"]) == 1
        assert "--port" in capsys.readouterr().err

    def test_non_numeric_port_in_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("HTTP_PORT", "abc")

        assert app.main(["--show-order", "--port", "8080"]) == 1

        err = capsys.readouterr().err
        assert err.startswith("Error: Invalid configuration for HTTP_PORT")

    def test_show_order(self, capsys):
        assert app.main(["--show-order"]) == 0

        out = capsys.readouterr().out
        assert "http_server" in out
        assert "Stop order:" in out

    def test_runs_system(self, capsys):
        with patch("app.setup_logging") as setup_logging, patch("app.run", return_value=0) as run:
            assert app.main(["--port", "8081", "--log-format", "json"]) == 0

        setup_logging.assert_called_once()
        assert setup_logging.call_args.kwargs["log_format"] == "json"
        system = run.call_args.args[0]
        assert set(system.components) == {"config", "app_routes", "http_server"}
        assert "127.0.0.1:8081" in capsys.readouterr().out
