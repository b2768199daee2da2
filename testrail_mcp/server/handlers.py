"""MCP handler functions - registered on the MCP server instance."""

import json
import logging
from typing import Any, Dict, List, Optional

from mcp import types as mcp_types
from mcp.server import Server as McpServer

from testrail_mcp.errors import TestrailMcpError
from testrail_mcp.gateway.dispatcher import ToolGateway
from testrail_mcp.gateway.meta_tools import EXECUTE_TOOL_NAME, META_TOOLS, SEARCH_TOOLS_NAME

logger = logging.getLogger(__name__)


def _text(payload: Any) -> List[mcp_types.TextContent]:
    return [mcp_types.TextContent(type="text", text=json.dumps(payload, indent=2, default=str))]


def _require_gateway(mcp_server: McpServer) -> ToolGateway:
    gateway: Optional[ToolGateway] = getattr(mcp_server, "gateway", None)
    if gateway is None:
        raise TestrailMcpError("Tool gateway is not initialized")
    return gateway


async def handle_search_tools(gateway: ToolGateway, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Body of the ``search_tools`` MCP tool."""
    query = arguments.get("query")
    query = query if isinstance(query, str) else ""
    tools = gateway.search_tools(query, limit=arguments.get("limit"))
    return {"query": query, "matchCount": len(tools), "tools": tools}


async def handle_execute_tool(gateway: ToolGateway, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Body of the ``execute_tool`` MCP tool."""
    result = await gateway.execute_tool(
        arguments.get("toolName") or "",
        arguments.get("parameters"),
    )
    return result.to_dict()


def register_handlers(mcp_server: McpServer) -> None:
    """Register all MCP protocol handlers on the server instance."""

    @mcp_server.list_tools()
    async def handle_list_tools() -> List[mcp_types.Tool]:
        logger.debug("Handling listTools request...")
        return list(META_TOOLS)

    @mcp_server.call_tool()
    async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> List[mcp_types.TextContent]:
        logger.debug("Handling callTool: name='%s'", name)
        gateway = _require_gateway(mcp_server)
        arguments = arguments or {}

        if name == SEARCH_TOOLS_NAME:
            return _text(await handle_search_tools(gateway, arguments))
        if name == EXECUTE_TOOL_NAME:
            return _text(await handle_execute_tool(gateway, arguments))

        logger.warning("callTool for unknown tool '%s'", name)
        raise TestrailMcpError(
            f"Unknown tool '{name}'. Available tools: {SEARCH_TOOLS_NAME}, {EXECUTE_TOOL_NAME}."
        )
