"""Milestone operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import BOOL, INT, LIMIT, OFFSET, STR, done

CATEGORY = "milestones"

_MILESTONE_FIELDS = {
    "name": "name",
    "description": "description",
    "dueOn": "due_on",
    "startOn": "start_on",
    "parentId": "parent_id",
    "refs": "refs",
    "isCompleted": "is_completed",
    "isStarted": "is_started",
}


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_milestone(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_milestone/{args['milestoneId']}")

    async def get_milestones(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_milestones/{args['projectId']}",
            "milestones",
            is_completed=args.get("isCompleted"),
            is_started=args.get("isStarted"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_milestone(args: Mapping[str, Any]) -> Any:
        return await client.post(
            f"add_milestone/{args['projectId']}", compact(args, _MILESTONE_FIELDS)
        )

    async def update_milestone(args: Mapping[str, Any]) -> Any:
        return await client.post(
            f"update_milestone/{args['milestoneId']}", compact(args, _MILESTONE_FIELDS)
        )

    async def delete_milestone(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_milestone/{args['milestoneId']}")
        return done(f"Milestone {args['milestoneId']} deleted")

    milestone_id = param("milestoneId", "The unique ID of the milestone.", INT)
    project_id = param("projectId", "The ID of the project.", INT)

    return [
        OperationDescriptor(
            name="get_milestone",
            description="Retrieves a milestone by ID: name, dates, completion state and sub-milestones.",
            category=CATEGORY,
            keywords=("get", "fetch", "show", "milestone", "release", "sprint"),
            examples=("execute_tool('get_milestone', {milestoneId: 4})",),
            parameters=(milestone_id,),
            invoke=get_milestone,
        ),
        OperationDescriptor(
            name="get_milestones",
            description=(
                "Lists the milestones of a project, optionally filtered by completed or "
                "started state. Milestones usually track releases or sprints."
            ),
            category=CATEGORY,
            keywords=("list", "all", "milestones", "releases", "sprints", "roadmap"),
            examples=(
                "execute_tool('get_milestones', {projectId: 1})",
                "execute_tool('get_milestones', {projectId: 1, isCompleted: false})",
            ),
            parameters=(
                project_id,
                param("isCompleted", "true for completed, false for open; omit for all.", BOOL, required=False),
                param("isStarted", "true for started, false for upcoming; omit for all.", BOOL, required=False),
                LIMIT,
                OFFSET,
            ),
            invoke=get_milestones,
        ),
        OperationDescriptor(
            name="add_milestone",
            description="Creates a milestone in a project, optionally as a sub-milestone with start and due dates.",
            category=CATEGORY,
            keywords=("add", "create", "new", "milestone", "release", "sprint"),
            examples=("execute_tool('add_milestone', {projectId: 1, name: 'Release 2.0', dueOn: 1735689600})",),
            parameters=(
                project_id,
                param("name", "The name of the milestone.", STR),
                param("description", "The description of the milestone.", STR, required=False),
                param("dueOn", "Due date as a UNIX timestamp.", INT, required=False),
                param("startOn", "Start date as a UNIX timestamp.", INT, required=False),
                param("parentId", "The ID of the parent milestone.", INT, required=False),
                param("refs", "Comma-separated references or requirements.", STR, required=False),
            ),
            invoke=add_milestone,
        ),
        OperationDescriptor(
            name="update_milestone",
            description="Updates a milestone's name, dates, parent, or started and completed state.",
            category=CATEGORY,
            keywords=("update", "modify", "edit", "complete", "start", "milestone"),
            examples=("execute_tool('update_milestone', {milestoneId: 4, isCompleted: true})",),
            parameters=(
                milestone_id,
                param("name", "New name.", STR, required=False),
                param("description", "New description.", STR, required=False),
                param("dueOn", "New due date as a UNIX timestamp.", INT, required=False),
                param("startOn", "New start date as a UNIX timestamp.", INT, required=False),
                param("isCompleted", "Mark as completed (true) or open (false).", BOOL, required=False),
                param("isStarted", "Mark as started (true) or upcoming (false).", BOOL, required=False),
                param("parentId", "New parent milestone ID.", INT, required=False),
            ),
            invoke=update_milestone,
        ),
        OperationDescriptor(
            name="delete_milestone",
            description="Permanently deletes a milestone. This cannot be undone.",
            category=CATEGORY,
            keywords=("delete", "remove", "milestone"),
            examples=("execute_tool('delete_milestone', {milestoneId: 4})",),
            parameters=(milestone_id,),
            invoke=delete_milestone,
        ),
    ]
