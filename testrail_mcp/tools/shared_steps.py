"""Shared step operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import CREATED_AFTER, CREATED_BEFORE, CREATED_BY, INT, LIMIT, OBJ, OFFSET, done

CATEGORY = "shared-steps"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_shared_step(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_shared_step/{args['sharedStepId']}")

    async def get_shared_step_history(args: Mapping[str, Any]) -> Any:
        return await client.get_list(f"get_shared_step_history/{args['sharedStepId']}", "step_history")

    async def get_shared_steps(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_shared_steps/{args['projectId']}",
            "shared_steps",
            created_after=args.get("createdAfter"),
            created_before=args.get("createdBefore"),
            created_by=args.get("createdBy"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_shared_step(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_shared_step/{args['projectId']}", dict(args["sharedStep"]))

    async def update_shared_step(args: Mapping[str, Any]) -> Any:
        return await client.post(
            f"update_shared_step/{args['sharedStepId']}", dict(args["sharedStep"])
        )

    async def delete_shared_step(args: Mapping[str, Any]) -> Any:
        keep = args.get("keepInCases")
        await client.post(
            f"delete_shared_step/{args['sharedStepId']}",
            {"keep_in_cases": keep} if keep is not None else None,
        )
        return done(f"Shared step {args['sharedStepId']} deleted")

    step_id = param("sharedStepId", "The ID of the shared step set.", INT)
    project_id = param("projectId", "The ID of the project.", INT)

    return [
        OperationDescriptor(
            name="get_shared_step",
            description="Retrieves a set of shared steps by ID with its title and individual steps.",
            category=CATEGORY,
            keywords=("get", "shared", "steps", "reusable", "common"),
            examples=("execute_tool('get_shared_step', {sharedStepId: 7})",),
            parameters=(step_id,),
            invoke=get_shared_step,
        ),
        OperationDescriptor(
            name="get_shared_step_history",
            description="Lists the change history of a set of shared steps.",
            category=CATEGORY,
            keywords=("history", "changes", "audit", "shared", "steps"),
            examples=("execute_tool('get_shared_step_history', {sharedStepId: 7})",),
            parameters=(step_id,),
            invoke=get_shared_step_history,
        ),
        OperationDescriptor(
            name="get_shared_steps",
            description="Lists the shared step sets of a project, filterable by creation time and creator.",
            category=CATEGORY,
            keywords=("list", "all", "shared", "steps", "reusable"),
            examples=("execute_tool('get_shared_steps', {projectId: 1})",),
            parameters=(project_id, CREATED_AFTER, CREATED_BEFORE, CREATED_BY, LIMIT, OFFSET),
            invoke=get_shared_steps,
        ),
        OperationDescriptor(
            name="add_shared_step",
            description=(
                "Creates a set of shared steps that test cases can reference. The map takes "
                "title and custom_steps_separated (a list of {content, expected} steps)."
            ),
            category=CATEGORY,
            keywords=("add", "create", "new", "shared", "steps", "reusable"),
            examples=(
                "execute_tool('add_shared_step', {projectId: 1, sharedStep: {title: 'Log in', "
                "custom_steps_separated: [{content: 'Open login page', expected: 'Form shown'}]}})",
            ),
            parameters=(project_id, param("sharedStep", "Shared step data: title and custom_steps_separated.", OBJ)),
            invoke=add_shared_step,
        ),
        OperationDescriptor(
            name="update_shared_step",
            description="Updates the title or steps of a set of shared steps.",
            category=CATEGORY,
            keywords=("update", "modify", "edit", "shared", "steps"),
            examples=("execute_tool('update_shared_step', {sharedStepId: 7, sharedStep: {title: 'Sign in'}})",),
            parameters=(step_id, param("sharedStep", "Shared step fields to change.", OBJ)),
            invoke=update_shared_step,
        ),
        OperationDescriptor(
            name="delete_shared_step",
            description=(
                "Deletes a set of shared steps. With keepInCases=1 the steps are copied into "
                "the cases that used them."
            ),
            category=CATEGORY,
            keywords=("delete", "remove", "shared", "steps"),
            examples=("execute_tool('delete_shared_step', {sharedStepId: 7, keepInCases: 1})",),
            parameters=(
                step_id,
                param("keepInCases", "1 to keep the steps in the referencing cases, 0 to drop them.", INT, required=False),
            ),
            invoke=delete_shared_step,
        ),
    ]
