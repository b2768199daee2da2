"""Test operations (case instances inside a run)."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, LIMIT, LIST, OFFSET, STR

CATEGORY = "tests"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_test(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_test/{args['testId']}", with_data=args.get("withData"))

    async def get_tests(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_tests/{args['runId']}",
            "tests",
            status_id=args.get("statusId"),
            label_id=args.get("labelId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    return [
        OperationDescriptor(
            name="get_test",
            description=(
                "Retrieves a test by ID. A test is one case inside a run; results are "
                "added against test IDs, not case IDs."
            ),
            category=CATEGORY,
            keywords=("get", "fetch", "show", "test", "instance", "status"),
            examples=("execute_tool('get_test', {testId: 1001})",),
            parameters=(
                param("testId", "The unique identifier of the test.", INT),
                param("withData", "Request additional data for the test.", STR, required=False),
            ),
            invoke=get_test,
        ),
        OperationDescriptor(
            name="get_tests",
            description=(
                "Lists the tests of a run, optionally filtered by status or label. Use it to "
                "map case IDs to the test IDs needed by add_result."
            ),
            category=CATEGORY,
            keywords=("list", "all", "tests", "run", "status", "filter"),
            examples=(
                "execute_tool('get_tests', {runId: 42})",
                "execute_tool('get_tests', {runId: 42, statusId: '4,5'})",
            ),
            parameters=(
                param("runId", "The ID of the test run.", INT),
                param("statusId", "Comma-separated status IDs to filter by, e.g. '1,4,5'.", LIST, required=False),
                param("labelId", "Comma-separated label IDs to filter by.", LIST, required=False),
                LIMIT,
                OFFSET,
            ),
            invoke=get_tests,
        ),
    ]
