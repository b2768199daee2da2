"""Pydantic configuration models for TestRail MCP.

Defines the validated config structure using the versioned v1 format.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from testrail_mcp.constants import (
    API_PATH,
    DEFAULT_API_TIMEOUT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TRANSPORT,
    DEFAULT_SEARCH_LIMIT,
    MAX_SEARCH_LIMIT,
)

# ── TestRail connection ──────────────────────────────────────────────────


class TestrailSettings(BaseModel):
    """TestRail instance and credentials."""

    __test__ = False  # not a pytest class despite the name

    base_url: str = Field(
        ...,
        min_length=1,
        description="TestRail instance URL (TESTRAIL_URL).",
    )
    username: str = Field(
        ...,
        min_length=1,
        description="TestRail user e-mail (TESTRAIL_USERNAME).",
    )
    api_key: str = Field(
        ...,
        min_length=1,
        description="TestRail API key or password (TESTRAIL_API_KEY). Supports ${ENV_VAR}.",
    )
    timeout: float = Field(
        default=DEFAULT_API_TIMEOUT,
        gt=0,
        description="HTTP request timeout in seconds.",
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates.")

    @field_validator("base_url")
    @classmethod
    def _validate_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL '{v}' must start with http:// or https://")
        return v

    @field_validator("username", "api_key")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        if v.startswith("${") and v.endswith("}"):
            raise ValueError(f"environment variable referenced by {v} is not set")
        return v

    @property
    def api_url(self) -> str:
        """Base URL with the API v2 path appended."""
        url = self.base_url
        if not url.endswith("/"):
            url += "/"
        return url + API_PATH


# ── Server settings ─────────────────────────────────────────────────────


class ServerSettings(BaseModel):
    """MCP server settings (transport, host, port)."""

    transport: Literal["stdio", "sse"] = DEFAULT_TRANSPORT
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    @field_validator("transport", mode="before")
    @classmethod
    def _normalise_transport(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ── Gateway settings ────────────────────────────────────────────────────


class GatewaySettings(BaseModel):
    """search_tools / execute_tool behaviour."""

    default_search_limit: int = Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=1,
        description="Results returned by search_tools when no limit is given.",
    )
    max_search_limit: int = Field(
        default=MAX_SEARCH_LIMIT,
        ge=1,
        description="Upper bound applied to the search_tools limit.",
    )
    execute_timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Seconds before execute_tool abandons an operation. Unset means no timeout.",
    )

    @model_validator(mode="after")
    def _check_limits(self) -> "GatewaySettings":
        if self.default_search_limit > self.max_search_limit:
            raise ValueError("default_search_limit must not exceed max_search_limit")
        return self


# ── Top-level config ────────────────────────────────────────────────────


class AppConfig(BaseModel):
    """Top-level validated configuration for TestRail MCP.

    Supports version ``"1"`` format::

        {
            "version": "1",
            "testrail": {"base_url": ..., "username": ..., "api_key": ...},
            "server": { ... },
            "gateway": { ... }
        }
    """

    version: str = "1"
    testrail: TestrailSettings
    server: ServerSettings = Field(default_factory=ServerSettings)
    gateway: GatewaySettings = Field(default_factory=GatewaySettings)
