"""Attachment listing and removal."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, STR, done

CATEGORY = "attachments"

_ATTACHMENT_ID_HELP = "The ID of the attachment (legacy integer or UUID)."


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    def _paged(uri: str, args: Mapping[str, Any]) -> Any:
        return client.get_list(uri, "attachments", limit=args.get("limit"), offset=args.get("offset"))

    async def get_attachments_for_case(args: Mapping[str, Any]) -> Any:
        return await _paged(f"get_attachments_for_case/{args['caseId']}", args)

    async def get_attachments_for_plan(args: Mapping[str, Any]) -> Any:
        return await _paged(f"get_attachments_for_plan/{args['planId']}", args)

    async def get_attachments_for_plan_entry(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_attachments_for_plan_entry/{args['planId']}/{args['entryId']}", "attachments"
        )

    async def get_attachments_for_run(args: Mapping[str, Any]) -> Any:
        return await _paged(f"get_attachments_for_run/{args['runId']}", args)

    async def get_attachments_for_test(args: Mapping[str, Any]) -> Any:
        return await client.get_list(f"get_attachments_for_test/{args['testId']}", "attachments")

    async def get_attachment(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_attachment/{args['attachmentId']}")

    async def delete_attachment(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_attachment/{args['attachmentId']}")
        return done(f"Attachment {args['attachmentId']} deleted")

    # Attachment listings page without the 250 default the other lists use.
    limit = param("limit", "Maximum number of attachments to return.", INT, required=False)
    offset = param("offset", "Number of attachments to skip.", INT, required=False)

    return [
        OperationDescriptor(
            name="get_attachments_for_case",
            description="Lists the files attached to a test case.",
            category=CATEGORY,
            keywords=("attachments", "files", "screenshots", "case", "list"),
            examples=("execute_tool('get_attachments_for_case', {caseId: 123})",),
            parameters=(param("caseId", "The ID of the test case.", INT), limit, offset),
            invoke=get_attachments_for_case,
        ),
        OperationDescriptor(
            name="get_attachments_for_plan",
            description="Lists the files attached to a test plan.",
            category=CATEGORY,
            keywords=("attachments", "files", "plan", "list"),
            examples=("execute_tool('get_attachments_for_plan', {planId: 80})",),
            parameters=(param("planId", "The ID of the test plan.", INT), limit, offset),
            invoke=get_attachments_for_plan,
        ),
        OperationDescriptor(
            name="get_attachments_for_plan_entry",
            description="Lists the files attached to one entry of a test plan.",
            category=CATEGORY,
            keywords=("attachments", "files", "plan", "entry", "list"),
            examples=("execute_tool('get_attachments_for_plan_entry', {planId: 80, entryId: '3933d74b'})",),
            parameters=(
                param("planId", "The ID of the test plan.", INT),
                param("entryId", "The ID of the plan entry.", STR),
            ),
            invoke=get_attachments_for_plan_entry,
        ),
        OperationDescriptor(
            name="get_attachments_for_run",
            description="Lists the files attached to a test run.",
            category=CATEGORY,
            keywords=("attachments", "files", "run", "logs", "list"),
            examples=("execute_tool('get_attachments_for_run', {runId: 42})",),
            parameters=(param("runId", "The ID of the test run.", INT), limit, offset),
            invoke=get_attachments_for_run,
        ),
        OperationDescriptor(
            name="get_attachments_for_test",
            description="Lists the files attached to a test's results.",
            category=CATEGORY,
            keywords=("attachments", "files", "screenshots", "test", "result", "list"),
            examples=("execute_tool('get_attachments_for_test', {testId: 1001})",),
            parameters=(param("testId", "The ID of the test.", INT),),
            invoke=get_attachments_for_test,
        ),
        OperationDescriptor(
            name="get_attachment",
            description="Retrieves an attachment by ID.",
            category=CATEGORY,
            keywords=("get", "download", "attachment", "file"),
            examples=("execute_tool('get_attachment', {attachmentId: '2ec27be4-812f-4806-9a0b-6ed7bdf0d5b8'})",),
            parameters=(param("attachmentId", _ATTACHMENT_ID_HELP, STR),),
            invoke=get_attachment,
        ),
        OperationDescriptor(
            name="delete_attachment",
            description="Permanently deletes an attachment. This cannot be undone.",
            category=CATEGORY,
            keywords=("delete", "remove", "attachment", "file"),
            examples=("execute_tool('delete_attachment', {attachmentId: '444'})",),
            parameters=(param("attachmentId", _ATTACHMENT_ID_HELP, STR),),
            invoke=delete_attachment,
        ),
    ]
