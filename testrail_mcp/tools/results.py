"""Test result operations."""

from typing import Any, Dict, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import (
    CREATED_AFTER,
    CREATED_BEFORE,
    CREATED_BY,
    INT,
    LIMIT,
    LIST,
    OFFSET,
    STR,
)

CATEGORY = "test-results"

_STATUS_HELP = "1=Passed, 2=Blocked, 3=Untested, 4=Retest, 5=Failed"

_RESULT_FIELDS = {
    "statusId": "status_id",
    "comment": "comment",
    "defects": "defects",
    "elapsed": "elapsed",
    "version": "version",
}


def _bulk_body(args: Mapping[str, Any], ids: List[int], id_field: str) -> Dict[str, Any]:
    common = compact(args, {"statusId": "status_id", "comment": "comment"})
    return {"results": [dict(common, **{id_field: i}) for i in ids]}


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_results(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_results/{args['testId']}",
            "results",
            defects_filter=args.get("defectsFilter"),
            status_id=args.get("statusId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def get_results_for_case(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_results_for_case/{args['runId']}/{args['caseId']}",
            "results",
            defects_filter=args.get("defectsFilter"),
            status_id=args.get("statusId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def get_results_for_run(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_results_for_run/{args['runId']}",
            "results",
            created_after=args.get("createdAfter"),
            created_before=args.get("createdBefore"),
            created_by=args.get("createdBy"),
            defects_filter=args.get("defectsFilter"),
            status_id=args.get("statusId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_result(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_result/{args['testId']}", compact(args, _RESULT_FIELDS))

    async def add_results(args: Mapping[str, Any]) -> Any:
        body = _bulk_body(args, args["testIds"], "test_id")
        return await client.post(f"add_results/{args['runId']}", body)

    async def add_results_for_cases(args: Mapping[str, Any]) -> Any:
        body = _bulk_body(args, args["caseIds"], "case_id")
        return await client.post(f"add_results_for_cases/{args['runId']}", body)

    run_id = param("runId", "The ID of the test run.", INT)
    status_filter = param(
        "statusId", "Comma-separated status IDs to filter by, e.g. '1,5'.", LIST, required=False
    )
    defects_filter = param(
        "defectsFilter", "Only results referencing this defect ID, e.g. 'TR-1'.", STR, required=False
    )
    bulk_status = param("statusId", f"Status ID applied to every result: {_STATUS_HELP}.", INT)
    bulk_comment = param("comment", "Comment applied to every result.", STR, required=False)

    return [
        OperationDescriptor(
            name="get_results",
            description=(
                "Lists the results recorded for a single test (the test ID, not the case ID), "
                "newest first, filterable by status or defect."
            ),
            category=CATEGORY,
            keywords=("get", "list", "results", "history", "test", "outcome"),
            examples=("execute_tool('get_results', {testId: 1001})",),
            parameters=(
                param("testId", "The ID of the test (not the case ID).", INT),
                defects_filter,
                status_filter,
                LIMIT,
                OFFSET,
            ),
            invoke=get_results,
        ),
        OperationDescriptor(
            name="get_results_for_case",
            description="Lists the results recorded for a test case within a specific run.",
            category=CATEGORY,
            keywords=("get", "list", "results", "history", "case", "run"),
            examples=("execute_tool('get_results_for_case', {runId: 42, caseId: 123})",),
            parameters=(
                run_id,
                param("caseId", "The ID of the test case.", INT),
                defects_filter,
                status_filter,
                LIMIT,
                OFFSET,
            ),
            invoke=get_results_for_case,
        ),
        OperationDescriptor(
            name="get_results_for_run",
            description=(
                "Lists all results recorded in a test run, filterable by creation time, "
                "creator, status and defect."
            ),
            category=CATEGORY,
            keywords=("get", "list", "results", "run", "report", "outcome"),
            examples=(
                "execute_tool('get_results_for_run', {runId: 42})",
                "execute_tool('get_results_for_run', {runId: 42, statusId: '5'})",
            ),
            parameters=(
                run_id,
                CREATED_AFTER,
                CREATED_BEFORE,
                CREATED_BY,
                defects_filter,
                status_filter,
                LIMIT,
                OFFSET,
            ),
            invoke=get_results_for_run,
        ),
        OperationDescriptor(
            name="add_result",
            description=(
                "Records a result for a test: pass, fail, block or retest it, with an optional "
                f"comment, defects, elapsed time and version. Status: {_STATUS_HELP}."
            ),
            category=CATEGORY,
            keywords=("add", "record", "submit", "result", "pass", "fail", "status", "report"),
            examples=(
                "execute_tool('add_result', {testId: 1001, statusId: 1})",
                "execute_tool('add_result', {testId: 1001, statusId: 5, comment: 'Timeout on login', defects: 'BUG-7'})",
            ),
            parameters=(
                param("testId", "The ID of the test (not the case ID) in the run.", INT),
                param("statusId", f"Status ID: {_STATUS_HELP}.", INT),
                param("comment", "Comment or notes about the execution.", STR, required=False),
                param("defects", "Defect references, e.g. 'BUG-123, BUG-456'.", STR, required=False),
                param("elapsed", "Time spent, e.g. '30s', '1m 45s', '2h'.", STR, required=False),
                param("version", "Version or build tested.", STR, required=False),
            ),
            invoke=add_result,
        ),
        OperationDescriptor(
            name="add_results",
            description="Records the same status (and optional comment) for several tests of a run in one call.",
            category=CATEGORY,
            keywords=("add", "bulk", "batch", "results", "tests", "status"),
            examples=("execute_tool('add_results', {runId: 42, testIds: '1001,1002', statusId: 1})",),
            parameters=(
                run_id,
                param("testIds", "Comma-separated list of test IDs.", LIST, items=INT),
                bulk_status,
                bulk_comment,
            ),
            invoke=add_results,
        ),
        OperationDescriptor(
            name="add_results_for_cases",
            description=(
                "Records the same status (and optional comment) for several cases of a run in "
                "one call, addressing them by case ID instead of test ID."
            ),
            category=CATEGORY,
            keywords=("add", "bulk", "batch", "results", "cases", "status"),
            examples=("execute_tool('add_results_for_cases', {runId: 42, caseIds: 'C1,C2', statusId: 5})",),
            parameters=(
                run_id,
                param("caseIds", "Comma-separated list of case IDs.", LIST, items=INT),
                bulk_status,
                bulk_comment,
            ),
            invoke=add_results_for_cases,
        ),
    ]
