"""
TestRail MCP - exposes the TestRail REST API to MCP clients.

Roughly a hundred TestRail operations are hidden behind two MCP tools:
``search_tools`` finds an operation by free-text query and ``execute_tool``
invokes it by name with a loosely typed argument map.
"""

from testrail_mcp.constants import SERVER_NAME, SERVER_VERSION

__version__ = SERVER_VERSION
__app_name__ = SERVER_NAME

__all__ = [
    "SERVER_NAME",
    "SERVER_VERSION",
    "__version__",
    "__app_name__",
]
