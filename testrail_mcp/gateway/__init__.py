"""Tool gateway - catalog, search index, argument coercion and dispatch.

Replaces direct exposure of every TestRail operation with two tools:

- ``search_tools``: ranked free-text search across all registered operations
- ``execute_tool``: validated dynamic invocation by exact operation name
"""

from testrail_mcp.gateway.catalog import (
    OperationCatalog,
    OperationDescriptor,
    ParameterDescriptor,
    SemanticType,
    param,
)
from testrail_mcp.gateway.coercion import coerce_value, validate_arguments
from testrail_mcp.gateway.dispatcher import ToolGateway
from testrail_mcp.gateway.meta_tools import (
    EXECUTE_TOOL_NAME,
    META_TOOLS,
    SEARCH_TOOLS_NAME,
)
from testrail_mcp.gateway.results import InvocationFailure, InvocationRequest, InvocationResult
from testrail_mcp.gateway.search import SearchHit, SearchIndexEntry, ToolIndex

__all__ = [
    "EXECUTE_TOOL_NAME",
    "META_TOOLS",
    "SEARCH_TOOLS_NAME",
    "InvocationFailure",
    "InvocationRequest",
    "InvocationResult",
    "OperationCatalog",
    "OperationDescriptor",
    "ParameterDescriptor",
    "SearchHit",
    "SearchIndexEntry",
    "SemanticType",
    "ToolGateway",
    "ToolIndex",
    "coerce_value",
    "param",
    "validate_arguments",
]
