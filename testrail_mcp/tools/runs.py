"""Test run operations."""

from typing import Any, Dict, List, Mapping

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

CATEGORY = "test-runs"

_RUN_FIELDS = {
    "name": "name",
    "description": "description",
    "suiteId": "suite_id",
    "milestoneId": "milestone_id",
    "assignedtoId": "assignedto_id",
}


def _add_run_body(args: Mapping[str, Any]) -> Dict[str, Any]:
    data = compact(args, _RUN_FIELDS)
    case_ids = args.get("caseIds")
    include_all = args.get("includeAll", True)
    # An explicit case selection only applies when include_all is off.
    if case_ids and not include_all:
        data["include_all"] = False
        data["case_ids"] = list(case_ids)
    else:
        data["include_all"] = include_all
    return data


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_run(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_run/{args['runId']}")

    async def get_runs(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_runs/{args['projectId']}",
            "runs",
            is_completed=args.get("isCompleted"),
            created_after=args.get("createdAfter"),
            created_before=args.get("createdBefore"),
            created_by=args.get("createdBy"),
            milestone_id=args.get("milestoneId"),
            suite_id=args.get("suiteId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_run(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_run/{args['projectId']}", _add_run_body(args))

    async def update_run(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_run/{args['runId']}", compact(args, _RUN_FIELDS))

    async def close_run(args: Mapping[str, Any]) -> Any:
        return await client.post(f"close_run/{args['runId']}")

    async def delete_run(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_run/{args['runId']}")
        return done(f"Test run {args['runId']} deleted")

    run_id = param("runId", "The unique identifier of the test run.", INT)

    return [
        OperationDescriptor(
            name="get_run",
            description=(
                "Retrieves a test run by ID with its name, suite, milestone, assignee and "
                "passed/failed/blocked/untested counts."
            ),
            category=CATEGORY,
            keywords=("get", "fetch", "show", "run", "execution", "progress"),
            examples=("execute_tool('get_run', {runId: 42})",),
            parameters=(run_id,),
            invoke=get_run,
        ),
        OperationDescriptor(
            name="get_runs",
            description=(
                "Lists the test runs of a project, filterable by completion state, creation "
                "time, creator, milestone and suite. Runs that belong to plans are not included."
            ),
            category=CATEGORY,
            keywords=("list", "all", "runs", "executions", "browse", "project"),
            examples=(
                "execute_tool('get_runs', {projectId: 1})",
                "execute_tool('get_runs', {projectId: 1, isCompleted: false, milestoneId: '4'})",
            ),
            parameters=(
                param("projectId", "The ID of the project.", INT),
                param("isCompleted", "true for completed runs, false for active ones.", BOOL, required=False),
                CREATED_AFTER,
                CREATED_BEFORE,
                CREATED_BY,
                param("milestoneId", "Comma-separated list of milestone IDs to filter by.", LIST, required=False),
                param("suiteId", "Comma-separated list of suite IDs to filter by.", LIST, required=False),
                LIMIT,
                OFFSET,
            ),
            invoke=get_runs,
        ),
        OperationDescriptor(
            name="add_run",
            description=(
                "Creates a new test run in a project. By default the run includes every case of "
                "the suite; set includeAll=false and pass caseIds to run a selection."
            ),
            category=CATEGORY,
            keywords=("add", "create", "new", "start", "run", "execute", "execution"),
            examples=(
                "execute_tool('add_run', {projectId: 1, name: 'Smoke run'})",
                "execute_tool('add_run', {projectId: 1, suiteId: 5, name: 'Login', includeAll: false, caseIds: '1,2,3'})",
            ),
            parameters=(
                param("projectId", "The ID of the project where the run will be created.", INT),
                param("name", "Name of the test run.", STR),
                param("description", "Description of the test run.", STR, required=False),
                param("suiteId", "Suite ID (multiple suite projects).", INT, required=False),
                param("milestoneId", "Milestone to associate with the run.", INT, required=False),
                param("assignedtoId", "User ID to assign the run to.", INT, required=False),
                param(
                    "includeAll",
                    "Include all cases of the suite. Default is true.",
                    BOOL,
                    required=False,
                    default="true",
                ),
                param(
                    "caseIds",
                    "Comma-separated case IDs to include when includeAll is false.",
                    LIST,
                    required=False,
                    items=INT,
                ),
            ),
            invoke=add_run,
        ),
        OperationDescriptor(
            name="update_run",
            description="Updates a test run's name, description, milestone or assignee.",
            category=CATEGORY,
            keywords=("update", "modify", "edit", "rename", "assign", "run"),
            examples=("execute_tool('update_run', {runId: 42, name: 'Smoke run (RC2)'})",),
            parameters=(
                run_id,
                param("name", "New name.", STR, required=False),
                param("description", "New description.", STR, required=False),
                param("milestoneId", "New milestone ID.", INT, required=False),
                param("assignedtoId", "New assigned user ID.", INT, required=False),
            ),
            invoke=update_run,
        ),
        OperationDescriptor(
            name="close_run",
            description="Closes a test run and archives its tests and results. Closed runs cannot be reopened.",
            category=CATEGORY,
            keywords=("close", "archive", "finish", "complete", "run"),
            examples=("execute_tool('close_run', {runId: 42})",),
            parameters=(run_id,),
            invoke=close_run,
        ),
        OperationDescriptor(
            name="delete_run",
            description="Permanently deletes a test run and all its results.",
            category=CATEGORY,
            keywords=("delete", "remove", "run"),
            examples=("execute_tool('delete_run', {runId: 42})",),
            parameters=(run_id,),
            invoke=delete_run,
        ),
    ]
