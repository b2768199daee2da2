"""Read-only instance metadata: case types, priorities, statuses, templates."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT

CATEGORY = "metadata"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_case_types(args: Mapping[str, Any]) -> Any:
        return await client.get("get_case_types")

    async def get_priorities(args: Mapping[str, Any]) -> Any:
        return await client.get("get_priorities")

    async def get_statuses(args: Mapping[str, Any]) -> Any:
        return await client.get("get_statuses")

    async def get_templates(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_templates/{args['projectId']}")

    return [
        OperationDescriptor(
            name="get_case_types",
            description=(
                "Lists the available test case types (Acceptance, Automated, Functional, "
                "Regression ...) with their IDs, for the typeId of add_case and update_case."
            ),
            category=CATEGORY,
            keywords=("case", "types", "type", "list", "metadata", "lookup"),
            examples=("execute_tool('get_case_types', {})",),
            invoke=get_case_types,
        ),
        OperationDescriptor(
            name="get_priorities",
            description="Lists the available case priorities with their IDs and which one is the default.",
            category=CATEGORY,
            keywords=("priorities", "priority", "list", "metadata", "lookup", "severity"),
            examples=("execute_tool('get_priorities', {})",),
            invoke=get_priorities,
        ),
        OperationDescriptor(
            name="get_statuses",
            description=(
                "Lists the test statuses (system and custom) with their IDs, labels and colours. "
                "System statuses: 1=Passed, 2=Blocked, 3=Untested, 4=Retest, 5=Failed."
            ),
            category=CATEGORY,
            keywords=("statuses", "status", "passed", "failed", "blocked", "list", "metadata"),
            examples=("execute_tool('get_statuses', {})",),
            invoke=get_statuses,
        ),
        OperationDescriptor(
            name="get_templates",
            description="Lists the case templates (field layouts) available in a project.",
            category=CATEGORY,
            keywords=("templates", "template", "layout", "list", "metadata"),
            examples=("execute_tool('get_templates', {projectId: 1})",),
            parameters=(param("projectId", "The ID of the project.", INT),),
            invoke=get_templates,
        ),
    ]
