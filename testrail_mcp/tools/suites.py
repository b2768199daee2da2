"""Test suite operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import BOOL, INT, STR, done

CATEGORY = "test-suites"

_SUITE_FIELDS = {"name": "name", "description": "description"}


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_suite(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_suite/{args['suiteId']}")

    async def get_suites(args: Mapping[str, Any]) -> Any:
        return await client.get_list(f"get_suites/{args['projectId']}", "suites")

    async def add_suite(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_suite/{args['projectId']}", compact(args, _SUITE_FIELDS))

    async def update_suite(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_suite/{args['suiteId']}", compact(args, _SUITE_FIELDS))

    async def delete_suite(args: Mapping[str, Any]) -> Any:
        soft = args.get("soft", False)
        await client.post(f"delete_suite/{args['suiteId']}", soft=1 if soft else None)
        if soft:
            return done(f"Soft delete of suite {args['suiteId']} previewed; nothing was removed")
        return done(f"Suite {args['suiteId']} deleted")

    suite_id = param("suiteId", "The unique identifier of the test suite.", INT)
    project_id = param("projectId", "The ID of the project.", INT)

    return [
        OperationDescriptor(
            name="get_suite",
            description="Retrieves a test suite by ID: name, description, project and completion state.",
            category=CATEGORY,
            keywords=("get", "fetch", "show", "suite", "details"),
            examples=("execute_tool('get_suite', {suiteId: 5})",),
            parameters=(suite_id,),
            invoke=get_suite,
        ),
        OperationDescriptor(
            name="get_suites",
            description=(
                "Lists the test suites of a project. Projects in multiple-suite mode need a "
                "suite ID for case, section and run operations; find it here."
            ),
            category=CATEGORY,
            keywords=("list", "all", "suites", "browse", "project"),
            examples=("execute_tool('get_suites', {projectId: 1})",),
            parameters=(project_id,),
            invoke=get_suites,
        ),
        OperationDescriptor(
            name="add_suite",
            description="Creates a new test suite in a project (multiple-suite mode projects only).",
            category=CATEGORY,
            keywords=("add", "create", "new", "suite"),
            examples=("execute_tool('add_suite', {projectId: 1, name: 'Regression'})",),
            parameters=(
                project_id,
                param("name", "Name of the test suite.", STR),
                param("description", "Description of the test suite.", STR, required=False),
            ),
            invoke=add_suite,
        ),
        OperationDescriptor(
            name="update_suite",
            description="Renames a test suite or changes its description.",
            category=CATEGORY,
            keywords=("update", "modify", "edit", "rename", "suite"),
            examples=("execute_tool('update_suite', {suiteId: 5, name: 'Smoke'})",),
            parameters=(
                suite_id,
                param("name", "New name.", STR, required=False),
                param("description", "New description.", STR, required=False),
            ),
            invoke=update_suite,
        ),
        OperationDescriptor(
            name="delete_suite",
            description=(
                "Deletes a test suite and all its sections and cases. With soft=true TestRail only "
                "reports what would be deleted."
            ),
            category=CATEGORY,
            keywords=("delete", "remove", "suite"),
            examples=(
                "execute_tool('delete_suite', {suiteId: 5})",
                "execute_tool('delete_suite', {suiteId: 5, soft: true})",
            ),
            parameters=(
                suite_id,
                param("soft", "Preview the deletion without removing data.", BOOL, required=False, default="false"),
            ),
            invoke=delete_suite,
        ),
    ]
