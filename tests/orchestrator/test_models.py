"""
Tests for orchestrator models.
"""

import pytest

from core.exceptions import InvalidConfigError
from orchestrator.models import SystemConfig, SystemState


class TestSystemState:
    """Test SystemState."""

    def test_only_running_is_running(self):
        assert SystemState.RUNNING.is_running is True
        assert SystemState.UNINITIALIZED.is_running is False
        assert SystemState.STOPPED.is_running is False

    def test_values(self):
        assert SystemState("stopped") is SystemState.STOPPED


class TestSystemConfig:
    """Test SystemConfig."""

    def test_defaults(self):
        config = SystemConfig()

        assert config.log_level == "INFO"
        assert config.log_format == "text"
        assert config.http_host == "127.0.0.1"
        assert config.http_port == 3000
        assert config.validate() == []

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        monkeypatch.setenv("CORRELATION_ID_PREFIX", "demo")
        monkeypatch.setenv("HTTP_HOST", "0.0.0.0")
        monkeypatch.setenv("HTTP_PORT", "8080")

        config = SystemConfig.from_env()

        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.correlation_id_prefix == "demo"
        assert config.http_host == "0.0.0.0"
        assert config.http_port == 8080

    def test_from_env_defaults(self, monkeypatch):
        for key in ("LOG_LEVEL", "LOG_FORMAT", "CORRELATION_ID_PREFIX", "HTTP_HOST", "HTTP_PORT"):
            monkeypatch.delenv(key, raising=False)

        assert SystemConfig.from_env() == SystemConfig()

    def test_from_env_non_numeric_port(self, monkeypatch):
        monkeypatch.setenv("HTTP_PORT", "abc")

        with pytest.raises(InvalidConfigError) as exc_info:
            SystemConfig.from_env()

        assert exc_info.value.key == "HTTP_PORT"
        assert exc_info.value.context["actual_value"] == "abc"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_validate_collects_every_error(self):
        config = SystemConfig(log_level="LOUD", log_format="xml", http_host="", http_port=0)

        errors = config.validate()

        assert len(errors) == 4
        assert any("log_level" in e for e in errors)
        assert any("http_port" in e for e in errors)

    def test_require_valid_raises(self):
        config = SystemConfig(http_port=70000)

        with pytest.raises(InvalidConfigError) as exc_info:
            config.require_valid()

        assert "http_port" in str(exc_info.value)
        assert exc_info.value.context["config_key"] == "system_config"

    def test_require_valid_passes(self):
        SystemConfig().require_valid()
