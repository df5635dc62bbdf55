"""
Tests for the orchestrator CLI helpers.
"""

import pytest

from orchestrator.cli import build_config, create_parser, print_banner, show_order, validate_args
from orchestrator.component import define
from orchestrator.core import System
from orchestrator.models import SystemConfig


@pytest.fixture
def parser():
    return create_parser()


class TestParser:
    """Test argument parsing."""

    def test_defaults_are_unset(self, parser):
        args = parser.parse_args([])

        assert args.host is None
        assert args.port is None
        assert args.log_level is None
        assert args.log_format is None
        assert args.show_order is False

    def test_flags(self, parser):
        args = parser.parse_args(
            ["--host", "0.0.0.0", "-p", "8080", "--log-level", "DEBUG", "--log-format", "json", "--show-order"]
        )

        assert args.host == "0.0.0.0"
        assert args.port == 8080
        assert args.log_level == "DEBUG"
        assert args.log_format == "json"
        assert args.show_order is True

    def test_rejects_unknown_log_format(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(["--log-format", "xml"])

    def test_version(self, parser, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "1.0.0" in capsys.readouterr().out


class TestValidateArgs:
    """Test validate_args."""

    def test_valid(self, parser):
        assert validate_args(parser.parse_args(["--port", "3000"])) == []

    @pytest.mark.parametrize("port", ["0", "65536", "-1"])
    def test_port_out_of_range(self, parser, port):
        errors = validate_args(parser.parse_args(["--port", port]))
        assert errors == ["--port must be between 1 and 65535"]

    def test_blank_host(self, parser):
        errors = validate_args(parser.parse_args(["--host", "  "]))
        assert errors == ["--host must not be empty"]


class TestBuildConfig:
    """Test build_config."""

    def test_flags_override_base(self, parser):
        base = SystemConfig(log_level="WARNING", http_port=5000, correlation_id_prefix="base")
        args = parser.parse_args(["--port", "8080", "--log-format", "json"])

        config = build_config(args, base=base)

        assert config.http_port == 8080
        assert config.log_format == "json"
        assert config.log_level == "WARNING"
        assert config.http_host == "127.0.0.1"
        assert config.correlation_id_prefix == "base"

    def test_base_from_environment(self, parser, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "4321")
        monkeypatch.delenv("HTTP_HOST", raising=False)

        config = build_config(parser.parse_args([]))

        assert config.http_port == 4321
        assert config.http_host == "127.0.0.1"


class TestShowOrder:
    """Test show_order output."""

    def test_prints_both_orders(self, make_lifecycle, capsys, calls):
        system = System({
            "config": define("config", make_lifecycle("config")),
            "http": define("http", make_lifecycle("http"), "config"),
        })

        assert show_order(system) == 0

        out = capsys.readouterr().out
        start_section, stop_section = out.split("Stop order:")
        assert start_section.index("config") < start_section.index("http")
        assert stop_section.index("http") < stop_section.index("config")
        assert calls == []

    def test_invalid_graph(self, make_lifecycle, capsys):
        system = System({"http": define("http", make_lifecycle("http"), "config")})

        assert show_order(system) == 1
        assert "config" in capsys.readouterr().err


def test_print_banner(capsys):
    print_banner(SystemConfig(http_host="0.0.0.0", http_port=9000))

    out = capsys.readouterr().out
    assert "0.0.0.0:9000" in out
    assert "COMPONENT ORCHESTRATOR" in out
