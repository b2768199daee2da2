"""Shared parameter declarations for the operation modules."""

from typing import Any, Dict

from testrail_mcp.gateway.catalog import SemanticType, param

INT = SemanticType.INTEGER
BOOL = SemanticType.BOOLEAN
STR = SemanticType.STRING
LIST = SemanticType.LIST
OBJ = SemanticType.OBJECT

LIMIT = param(
    "limit",
    "Maximum number of results to return (1-250, default: 250).",
    INT,
    required=False,
    default="250",
)
OFFSET = param(
    "offset",
    "Number of results to skip for pagination. Use with limit to page through large result sets.",
    INT,
    required=False,
    default="0",
)
CREATED_AFTER = param(
    "createdAfter", "Only return entities created after this UNIX timestamp.", INT, required=False
)
CREATED_BEFORE = param(
    "createdBefore", "Only return entities created before this UNIX timestamp.", INT, required=False
)
CREATED_BY = param(
    "createdBy", "Comma-separated list of creator user IDs to filter by.", LIST, required=False
)


def done(message: str) -> Dict[str, Any]:
    """Result of an operation that returns no entity (deletes, closes)."""
    return {"success": True, "message": message}
