"""Tests for MCP handler wiring and the server lifespan."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from mcp import types as mcp_types
from mcp.server import Server as McpServer

from testrail_mcp import errors
from testrail_mcp.config import validate_config
from testrail_mcp.gateway.catalog import OperationCatalog, OperationDescriptor, SemanticType, param
from testrail_mcp.gateway.dispatcher import ToolGateway
from testrail_mcp.gateway.meta_tools import EXECUTE_TOOL_NAME, META_TOOLS, SEARCH_TOOLS_NAME
from testrail_mcp.server.app import create_app
from testrail_mcp.server.handlers import (
    _require_gateway,
    _text,
    handle_execute_tool,
    handle_search_tools,
    register_handlers,
)
from testrail_mcp.server.lifespan import gateway_lifespan


def _gateway() -> ToolGateway:
    catalog = OperationCatalog()
    catalog.register(
        OperationDescriptor(
            name="get_widget",
            description="Fetch a widget by id",
            category="widgets",
            invoke=lambda args: {"id": args["widgetId"]},
            parameters=(param("widgetId", type=SemanticType.INTEGER),),
        )
    )
    catalog.freeze()
    return ToolGateway(catalog)


def _config():
    return validate_config(
        {"testrail": {"base_url": "https://example.testrail.io", "username": "u", "api_key": "key-1234"}},
        {},
    )


class TestMetaTools:
    def test_only_two_public_tools(self) -> None:
        assert [t.name for t in META_TOOLS] == [SEARCH_TOOLS_NAME, EXECUTE_TOOL_NAME]

    def test_required_arguments(self) -> None:
        search, execute = META_TOOLS
        assert search.inputSchema["required"] == ["query"]
        assert execute.inputSchema["required"] == ["toolName"]


class TestHandlerBodies:
    def test_search_tools_shape(self) -> None:
        payload = asyncio.run(handle_search_tools(_gateway(), {"query": "widget"}))
        assert payload["query"] == "widget"
        assert payload["matchCount"] == 1
        assert payload["tools"][0]["name"] == "get_widget"

    def test_search_tools_non_string_query(self) -> None:
        payload = asyncio.run(handle_search_tools(_gateway(), {"query": 5}))
        assert payload["query"] == ""
        assert payload["matchCount"] == 1

    def test_execute_tool_success(self) -> None:
        payload = asyncio.run(
            handle_execute_tool(_gateway(), {"toolName": "get_widget", "parameters": {"widgetId": "3"}})
        )
        assert payload == {"tool": "get_widget", "success": True, "result": {"id": 3}}

    def test_execute_tool_missing_name(self) -> None:
        payload = asyncio.run(handle_execute_tool(_gateway(), {}))
        assert payload["success"] is False
        assert payload["error"]["kind"] == "UnknownOperationError"

    def test_text_content_is_json(self) -> None:
        (content,) = _text({"a": 1})
        assert content.type == "text"
        assert '"a": 1' in content.text


class TestRegistration:
    def test_handlers_registered(self) -> None:
        server = McpServer("test")
        register_handlers(server)
        assert mcp_types.ListToolsRequest in server.request_handlers
        assert mcp_types.CallToolRequest in server.request_handlers

    def test_gateway_required(self) -> None:
        server = McpServer("test")
        with pytest.raises(errors.TestrailMcpError, match="not initialized"):
            _require_gateway(server)
        server.gateway = _gateway()  # type: ignore[attr-defined]
        assert _require_gateway(server) is server.gateway


class TestLifespan:
    def test_gateway_built_and_client_closed(self) -> None:
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"id": 1}))

        async def _main():
            async with gateway_lifespan(_config(), transport=transport) as gateway:
                assert gateway.catalog.frozen
                result = await gateway.execute_tool("get_project", {"projectId": 1})
                assert result.ok
                return gateway

        gateway = asyncio.run(_main())
        assert gateway.index.tool_count == len(gateway.catalog)

    def test_create_app_routes(self) -> None:
        app = create_app(_config())
        paths = {getattr(route, "path", None) for route in app.routes}
        assert "/sse" in paths
        assert app.state.config.testrail.username == "u"
