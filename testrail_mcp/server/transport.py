"""Transport handling for MCP connections: SSE over HTTP and stdio."""

import logging

from mcp.server.lowlevel import NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.requests import Request
from starlette.responses import Response

from testrail_mcp.config.schema import AppConfig
from testrail_mcp.constants import POST_MESSAGES_PATH, SERVER_NAME, SERVER_VERSION

logger = logging.getLogger(__name__)

# Module-level SSE transport instance
sse_transport = SseServerTransport(POST_MESSAGES_PATH)


def _init_options(mcp_server) -> InitializationOptions:
    return InitializationOptions(
        server_name=SERVER_NAME,
        server_version=SERVER_VERSION,
        capabilities=mcp_server.get_capabilities(NotificationOptions(), {}),
    )


async def handle_sse(request: Request) -> Response:
    """Handle incoming SSE connection requests."""
    from testrail_mcp.server.app import mcp_server

    logger.debug("Received new SSE connection request (GET): %s", request.url)

    if getattr(mcp_server, "gateway", None) is None:
        logger.error("Tool gateway is unset in handle_sse; cannot handle SSE connection.")
        return Response("Server is not ready", status_code=503)

    async with sse_transport.connect_sse(
        request.scope,
        request.receive,
        request._send,
    ) as (read_stream, write_stream):
        await mcp_server.run(read_stream, write_stream, _init_options(mcp_server))
    logger.debug("SSE connection closed: %s", request.url)
    return Response()


async def run_stdio(config: AppConfig) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    from testrail_mcp.server.app import mcp_server
    from testrail_mcp.server.lifespan import gateway_lifespan

    async with gateway_lifespan(config) as gateway:
        mcp_server.gateway = gateway  # type: ignore[attr-defined]
        try:
            async with stdio_server() as (read_stream, write_stream):
                logger.info("Serving MCP over stdio")
                await mcp_server.run(read_stream, write_stream, _init_options(mcp_server))
        finally:
            mcp_server.gateway = None  # type: ignore[attr-defined]
    logger.info("stdio session ended")
