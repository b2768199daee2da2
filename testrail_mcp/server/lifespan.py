"""Application lifespan management - startup and shutdown sequences."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from starlette.applications import Starlette

from testrail_mcp.client import TestrailClient
from testrail_mcp.config.schema import AppConfig
from testrail_mcp.display.logging_config import secret_redaction_filter
from testrail_mcp.errors import ConfigurationError
from testrail_mcp.gateway.dispatcher import ToolGateway
from testrail_mcp.gateway.search import ToolIndex
from testrail_mcp.tools import build_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def gateway_lifespan(
    config: AppConfig,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[ToolGateway]:
    """Build client, catalog, index and gateway; close the client on exit.

    Shared by the stdio and SSE transports.
    """
    secret_redaction_filter.register(config.testrail.api_key)

    client = TestrailClient(config.testrail, transport=transport)
    try:
        catalog = build_catalog(client)
        index = ToolIndex(catalog)
        gateway = ToolGateway(
            catalog,
            index,
            default_limit=config.gateway.default_search_limit,
            max_limit=config.gateway.max_search_limit,
            execute_timeout=config.gateway.execute_timeout,
        )
        logger.info(
            "Tool gateway ready: %d operations indexed (TestRail at %s)",
            index.tool_count,
            config.testrail.base_url,
        )
        yield gateway
    finally:
        logger.info("Closing TestRail client...")
        await client.close()


@asynccontextmanager
async def app_lifespan(app: Starlette) -> AsyncIterator[None]:
    """Starlette lifespan: attach the gateway to the module-level MCP server."""
    from testrail_mcp.server.app import mcp_server

    config: Optional[AppConfig] = getattr(app.state, "config", None)
    if config is None:
        raise ConfigurationError("Application configuration was not set on app.state")

    logger.info("Server startup sequence beginning...")
    async with gateway_lifespan(config) as gateway:
        mcp_server.gateway = gateway  # type: ignore[attr-defined]
        try:
            yield
        finally:
            logger.info("Server shutdown sequence beginning...")
            mcp_server.gateway = None  # type: ignore[attr-defined]
    logger.info("Server shutdown sequence complete.")
