"""MCP tool definitions for the two public gateway operations.

``search_tools`` and ``execute_tool`` are the only tools an MCP client ever
sees; every TestRail operation is reached through them.
"""

from __future__ import annotations

from typing import List

from mcp import types as mcp_types

from testrail_mcp.constants import DEFAULT_SEARCH_LIMIT

# ── Tool definitions ─────────────────────────────────────────────────────

SEARCH_TOOLS_NAME = "search_tools"
EXECUTE_TOOL_NAME = "execute_tool"

SEARCH_TOOLS_DEF = mcp_types.Tool(
    name=SEARCH_TOOLS_NAME,
    description=(
        "Searches for available TestRail tools matching a natural language query. "
        "Returns a ranked list of matching tools with name, description, category, "
        "keywords, usage examples and full parameter specifications "
        "(name, type, description, required, defaultValue). "
        "Use this first to discover which TestRail tools fit your task, then call "
        "execute_tool with the returned tool name and parameters. "
        "An empty query lists the available tools."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": (
                    "Natural language description of what you want to do, e.g. "
                    "'add test result', 'get test cases for project', 'create milestone'."
                ),
            },
            "limit": {
                "type": "integer",
                "description": f"Maximum number of results to return (default: {DEFAULT_SEARCH_LIMIT}).",
                "default": DEFAULT_SEARCH_LIMIT,
            },
        },
        "required": ["query"],
    },
)

EXECUTE_TOOL_DEF = mcp_types.Tool(
    name=EXECUTE_TOOL_NAME,
    description=(
        "Executes a specific TestRail tool by name with the provided parameters. "
        "Use search_tools first to find the tool name and its parameters. "
        "Parameters are a flat key-value map using the parameter names returned by "
        'search_tools, for example: execute_tool(toolName: "get_case", '
        'parameters: {"caseId": 123}) or execute_tool(toolName: "add_result", '
        'parameters: {"testId": 5, "statusId": 1, "comment": "Passed"}).'
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "toolName": {
                "type": "string",
                "description": "The exact tool name as returned by search_tools (e.g. 'get_case').",
            },
            "parameters": {
                "type": "object",
                "description": "Flat key-value map of parameters for the tool.",
                "default": {},
            },
        },
        "required": ["toolName"],
    },
)

META_TOOLS: List[mcp_types.Tool] = [SEARCH_TOOLS_DEF, EXECUTE_TOOL_DEF]
