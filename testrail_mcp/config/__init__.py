"""Configuration loading and validation for TestRail MCP."""

from testrail_mcp.config.loader import expand_env_vars, load_config, validate_config
from testrail_mcp.config.schema import (
    AppConfig,
    GatewaySettings,
    ServerSettings,
    TestrailSettings,
)

__all__ = [
    "AppConfig",
    "GatewaySettings",
    "ServerSettings",
    "TestrailSettings",
    "expand_env_vars",
    "load_config",
    "validate_config",
]
