"""Starlette ASGI application factory and MCP server instance."""

import logging
from typing import Optional

from mcp.server import Server as McpServer
from starlette.applications import Starlette
from starlette.routing import Mount, Route

from testrail_mcp.config.schema import AppConfig
from testrail_mcp.constants import POST_MESSAGES_PATH, SERVER_NAME, SSE_PATH
from testrail_mcp.gateway.dispatcher import ToolGateway
from testrail_mcp.server.handlers import register_handlers
from testrail_mcp.server.lifespan import app_lifespan
from testrail_mcp.server.transport import handle_sse, sse_transport

logger = logging.getLogger(__name__)

# Module-level MCP server instance
mcp_server = McpServer(SERVER_NAME)
mcp_server.gateway: Optional[ToolGateway] = None  # type: ignore[attr-defined]
logger.debug("Underlying MCP server instance '%s' created.", mcp_server.name)

# Register all MCP handlers
register_handlers(mcp_server)


def create_app(config: AppConfig) -> Starlette:
    """Create and return the Starlette ASGI application for *config*."""
    application = Starlette(
        lifespan=app_lifespan,
        routes=[
            Route(SSE_PATH, endpoint=handle_sse),
            Mount(POST_MESSAGES_PATH, app=sse_transport.handle_post_message),
        ],
    )
    application.state.config = config
    logger.info(
        "Starlette ASGI app '%s' created. SSE GET on %s, POST on %s",
        SERVER_NAME,
        SSE_PATH,
        POST_MESSAGES_PATH,
    )
    return application
