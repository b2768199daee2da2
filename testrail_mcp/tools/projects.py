"""Project operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import BOOL, INT, LIMIT, OFFSET, STR, done

CATEGORY = "projects"

_PROJECT_FIELDS = {
    "name": "name",
    "announcement": "announcement",
    "showAnnouncement": "show_announcement",
    "suiteMode": "suite_mode",
    "isCompleted": "is_completed",
}


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_project(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_project/{args['projectId']}")

    async def get_projects(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            "get_projects",
            "projects",
            is_completed=args.get("isCompleted"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_project(args: Mapping[str, Any]) -> Any:
        return await client.post("add_project", compact(args, _PROJECT_FIELDS))

    async def update_project(args: Mapping[str, Any]) -> Any:
        return await client.post(
            f"update_project/{args['projectId']}", compact(args, _PROJECT_FIELDS)
        )

    async def delete_project(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_project/{args['projectId']}")
        return done(f"Project {args['projectId']} deleted")

    project_id = param("projectId", "The unique identifier of the project.", INT)

    return [
        OperationDescriptor(
            name="get_project",
            description=(
                "Retrieves a single TestRail project by its ID, including name, announcement, "
                "suite mode (single, baseline or multiple suites) and completion state. "
                "Use it to check a project's suite mode before creating runs or cases."
            ),
            category=CATEGORY,
            keywords=("get", "retrieve", "fetch", "show", "project", "details"),
            examples=("execute_tool('get_project', {projectId: 1})",),
            parameters=(project_id,),
            invoke=get_project,
        ),
        OperationDescriptor(
            name="get_projects",
            description=(
                "Lists all projects the user can access, optionally filtered by completion "
                "state. Start here to find a project ID when only its name is known."
            ),
            category=CATEGORY,
            keywords=("list", "all", "projects", "browse", "find", "overview"),
            examples=(
                "execute_tool('get_projects', {})",
                "execute_tool('get_projects', {isCompleted: false})",
            ),
            parameters=(
                param(
                    "isCompleted",
                    "true for completed projects only, false for active ones; omit for all.",
                    BOOL,
                    required=False,
                ),
                LIMIT,
                OFFSET,
            ),
            invoke=get_projects,
        ),
        OperationDescriptor(
            name="add_project",
            description=(
                "Creates a new project. Requires administrator rights. "
                "Suite mode: 1 = single suite, 2 = single suite with baselines, 3 = multiple suites."
            ),
            category=CATEGORY,
            keywords=("add", "create", "new", "project"),
            examples=("execute_tool('add_project', {name: 'Mobile App', suiteMode: 1})",),
            parameters=(
                param("name", "Name of the project.", STR),
                param("announcement", "Description or announcement of the project.", STR, required=False),
                param(
                    "showAnnouncement",
                    "Show the announcement on the project overview page.",
                    BOOL,
                    required=False,
                ),
                param("suiteMode", "Suite mode: 1, 2 or 3.", INT, required=False, default="1"),
            ),
            invoke=add_project,
        ),
        OperationDescriptor(
            name="update_project",
            description=(
                "Updates an existing project: name, announcement or completion state. "
                "Only the supplied fields change. Mark a project completed with isCompleted=true."
            ),
            category=CATEGORY,
            keywords=("update", "modify", "edit", "rename", "complete", "project"),
            examples=("execute_tool('update_project', {projectId: 1, isCompleted: true})",),
            parameters=(
                project_id,
                param("name", "New project name.", STR, required=False),
                param("announcement", "New announcement.", STR, required=False),
                param("showAnnouncement", "Show the announcement.", BOOL, required=False),
                param("isCompleted", "Mark the project as completed.", BOOL, required=False),
            ),
            invoke=update_project,
        ),
        OperationDescriptor(
            name="delete_project",
            description=(
                "Permanently deletes a project together with all its suites, cases, runs and "
                "results. This cannot be undone."
            ),
            category=CATEGORY,
            keywords=("delete", "remove", "destroy", "project"),
            examples=("execute_tool('delete_project', {projectId: 7})",),
            parameters=(project_id,),
            invoke=delete_project,
        ),
    ]
