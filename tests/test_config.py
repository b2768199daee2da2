"""Tests for configuration loading, CLI overrides and log redaction."""

from __future__ import annotations

import argparse
import logging

import pytest

from testrail_mcp import errors
from testrail_mcp.cli import CONFIG_ENV_VAR, _apply_cli_overrides, _find_config_file
from testrail_mcp.config import expand_env_vars, load_config, validate_config
from testrail_mcp.display.logging_config import SecretRedactionFilter, build_log_config

_YAML = """\
version: "1"
testrail:
  base_url: https://example.testrail.io
  username: qa@example.com
  api_key: ${TR_KEY}
server:
  transport: SSE
  port: 9100
gateway:
  default_search_limit: 5
"""


class TestExpandEnvVars:
    def test_set_variable(self) -> None:
        assert expand_env_vars("key-${A}", {"A": "1"}) == "key-1"

    def test_fallback(self) -> None:
        assert expand_env_vars("${MISSING:-dflt}", {}) == "dflt"

    def test_unset_keeps_placeholder(self) -> None:
        assert expand_env_vars("${MISSING}", {}) == "${MISSING}"

    def test_nested_structures(self) -> None:
        data = {"a": ["${X}", 3], "b": {"c": "${X}"}}
        assert expand_env_vars(data, {"X": "y"}) == {"a": ["y", 3], "b": {"c": "y"}}


class TestLoadConfig:
    def test_yaml_file_with_env_expansion(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(_YAML, encoding="utf-8")

        config = load_config(str(path), environ={"TR_KEY": "abcd1234"})

        assert config.testrail.api_key == "abcd1234"
        assert config.testrail.api_url == "https://example.testrail.io/index.php?/api/v2/"
        assert config.server.transport == "sse"
        assert config.server.port == 9100
        assert config.gateway.default_search_limit == 5
        assert config.gateway.execute_timeout is None

    def test_environment_only(self) -> None:
        env = {
            "TESTRAIL_URL": "https://tr.example.com",
            "TESTRAIL_USERNAME": "me@example.com",
            "TESTRAIL_API_KEY": "k3y-value",
        }
        config = load_config(None, environ=env)
        assert config.testrail.base_url == "https://tr.example.com"
        assert config.server.transport == "stdio"

    def test_file_values_win_over_environment(self) -> None:
        raw = {"testrail": {"base_url": "https://file.example.com", "username": "f", "api_key": "file-key"}}
        env = {"TESTRAIL_URL": "https://env.example.com"}
        assert validate_config(raw, env).testrail.base_url == "https://file.example.com"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(errors.ConfigurationError, match="does not exist"):
            load_config(str(tmp_path / "absent.yaml"), environ={})

    def test_unsupported_extension(self, tmp_path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(errors.ConfigurationError, match="Unsupported"):
            load_config(str(path), environ={})

    def test_non_mapping_yaml(self, tmp_path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(errors.ConfigurationError, match="mapping"):
            load_config(str(path), environ={})


class TestValidation:
    def test_missing_credentials_reported_together(self) -> None:
        with pytest.raises(errors.ConfigurationError) as exc_info:
            validate_config({}, {})
        assert "testrail" in str(exc_info.value)

    def test_unexpanded_placeholder_rejected(self) -> None:
        raw = {"testrail": {"base_url": "https://x.io", "username": "u", "api_key": "${TR_KEY}"}}
        with pytest.raises(errors.ConfigurationError) as exc_info:
            validate_config(raw, {})
        assert "api_key" in str(exc_info.value)
        assert "not set" in str(exc_info.value)

    def test_url_scheme_required(self) -> None:
        raw = {"testrail": {"base_url": "example.com", "username": "u", "api_key": "key1"}}
        with pytest.raises(errors.ConfigurationError, match="http"):
            validate_config(raw, {})

    def test_default_limit_above_max_rejected(self) -> None:
        raw = {
            "testrail": {"base_url": "https://x.io", "username": "u", "api_key": "key1"},
            "gateway": {"default_search_limit": 30, "max_search_limit": 20},
        }
        with pytest.raises(errors.ConfigurationError, match="default_search_limit"):
            validate_config(raw, {})


class TestCliHelpers:
    def test_cli_path_wins(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "/elsewhere.yaml")
        assert _find_config_file(str(tmp_path / "c.yaml")) == str(tmp_path / "c.yaml")

    def test_env_path_used(self, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, "/etc/testrail-mcp.yaml")
        assert _find_config_file(None) == "/etc/testrail-mcp.yaml"

    def test_cwd_discovery(self, tmp_path, monkeypatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.chdir(tmp_path)
        assert _find_config_file(None) is None
        (tmp_path / "config.yml").write_text("{}", encoding="utf-8")
        assert _find_config_file(None) == str(tmp_path / "config.yml")

    def test_overrides_applied(self) -> None:
        config = validate_config(
            {"testrail": {"base_url": "https://x.io", "username": "u", "api_key": "key1"}}, {}
        )
        args = argparse.Namespace(transport="sse", host=None, port=8123)
        updated = _apply_cli_overrides(config, args)
        assert updated.server.transport == "sse"
        assert updated.server.port == 8123
        assert updated.server.host == config.server.host
        assert config.server.transport == "stdio"


class TestSecretRedaction:
    def _record(self, msg, *args) -> logging.LogRecord:
        return logging.LogRecord("t", logging.INFO, __file__, 1, msg, args, None)

    def test_registered_secret_masked(self) -> None:
        f = SecretRedactionFilter()
        f.register("super-secret")
        record = self._record("key=%s", "super-secret")
        assert f.filter(record)
        assert record.getMessage() == "key=***REDACTED***"

    def test_short_values_ignored(self) -> None:
        f = SecretRedactionFilter()
        f.register("abc")
        assert f.redact("abc") == "abc"

    def test_log_config_levels(self) -> None:
        cfg = build_log_config("/tmp/x.log", "DEBUG")
        assert cfg["loggers"]["testrail_mcp"]["level"] == "DEBUG"
        assert cfg["root"]["level"] == "DEBUG"
        assert cfg["handlers"]["file_handler"]["filename"] == "/tmp/x.log"
