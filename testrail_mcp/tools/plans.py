"""Test plan operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import (
    BOOL,
    CREATED_AFTER,
    CREATED_BEFORE,
    CREATED_BY,
    INT,
    LIMIT,
    LIST,
    OFFSET,
    STR,
    done,
)

CATEGORY = "plans"

_PLAN_FIELDS = {
    "name": "name",
    "description": "description",
    "milestoneId": "milestone_id",
    "startOn": "start_on",
    "dueOn": "due_on",
}


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_plan(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_plan/{args['planId']}")

    async def get_plans(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_plans/{args['projectId']}",
            "plans",
            created_after=args.get("createdAfter"),
            created_before=args.get("createdBefore"),
            created_by=args.get("createdBy"),
            is_completed=args.get("isCompleted"),
            milestone_id=args.get("milestoneId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_plan(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_plan/{args['projectId']}", compact(args, _PLAN_FIELDS))

    async def update_plan(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_plan/{args['planId']}", compact(args, _PLAN_FIELDS))

    async def close_plan(args: Mapping[str, Any]) -> Any:
        return await client.post(f"close_plan/{args['planId']}")

    async def delete_plan(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_plan/{args['planId']}")
        return done(f"Test plan {args['planId']} deleted")

    plan_id = param("planId", "The unique identifier of the test plan.", INT)
    project_id = param("projectId", "The ID of the project.", INT)

    return [
        OperationDescriptor(
            name="get_plan",
            description=(
                "Retrieves a test plan by ID including its entries (runs grouped per suite and "
                "configuration) and pass/fail counts."
            ),
            category=CATEGORY,
            keywords=("get", "fetch", "show", "plan", "details", "entries"),
            examples=("execute_tool('get_plan', {planId: 80})",),
            parameters=(plan_id,),
            invoke=get_plan,
        ),
        OperationDescriptor(
            name="get_plans",
            description=(
                "Lists the test plans of a project, filterable by creation time, creator, "
                "completion state and milestone."
            ),
            category=CATEGORY,
            keywords=("list", "all", "plans", "browse", "project"),
            examples=(
                "execute_tool('get_plans', {projectId: 1})",
                "execute_tool('get_plans', {projectId: 1, isCompleted: true, milestoneId: '5'})",
            ),
            parameters=(
                project_id,
                CREATED_AFTER,
                CREATED_BEFORE,
                CREATED_BY,
                param("isCompleted", "true for completed plans, false for active ones.", BOOL, required=False),
                param("milestoneId", "Comma-separated list of milestone IDs to filter by.", LIST, required=False),
                LIMIT,
                OFFSET,
            ),
            invoke=get_plans,
        ),
        OperationDescriptor(
            name="add_plan",
            description="Creates a new test plan in a project, optionally linked to a milestone.",
            category=CATEGORY,
            keywords=("add", "create", "new", "plan"),
            examples=("execute_tool('add_plan', {projectId: 1, name: 'Release 2.0 regression', milestoneId: 4})",),
            parameters=(
                project_id,
                param("name", "The name of the test plan.", STR),
                param("description", "Description of the test plan.", STR, required=False),
                param("milestoneId", "Milestone to link the plan to.", INT, required=False),
                param("startOn", "Start date as a UNIX timestamp.", INT, required=False),
                param("dueOn", "Due date as a UNIX timestamp.", INT, required=False),
            ),
            invoke=add_plan,
        ),
        OperationDescriptor(
            name="update_plan",
            description="Updates a test plan's name, description, milestone or dates.",
            category=CATEGORY,
            keywords=("update", "modify", "edit", "rename", "plan"),
            examples=("execute_tool('update_plan', {planId: 80, name: 'Release 2.1 regression'})",),
            parameters=(
                plan_id,
                param("name", "New name.", STR, required=False),
                param("description", "New description.", STR, required=False),
                param("milestoneId", "New milestone ID.", INT, required=False),
                param("startOn", "New start date as a UNIX timestamp.", INT, required=False),
                param("dueOn", "New due date as a UNIX timestamp.", INT, required=False),
            ),
            invoke=update_plan,
        ),
        OperationDescriptor(
            name="close_plan",
            description=(
                "Closes a test plan and archives its runs and results. Closed plans cannot be "
                "edited or reopened."
            ),
            category=CATEGORY,
            keywords=("close", "archive", "finish", "complete", "plan"),
            examples=("execute_tool('close_plan', {planId: 80})",),
            parameters=(plan_id,),
            invoke=close_plan,
        ),
        OperationDescriptor(
            name="delete_plan",
            description="Permanently deletes a test plan with all its runs and results.",
            category=CATEGORY,
            keywords=("delete", "remove", "plan"),
            examples=("execute_tool('delete_plan', {planId: 80})",),
            parameters=(plan_id,),
            invoke=delete_plan,
        ),
    ]
