"""Test case operations."""

from typing import Any, Dict, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, LIMIT, OFFSET, STR, done

CATEGORY = "test-cases"

# argument name -> TestRail field; steps and expectations live in the
# default template's custom fields.
_CASE_FIELDS = {
    "title": "title",
    "steps": "custom_steps",
    "expectedResult": "custom_expected",
    "preconditions": "custom_preconds",
    "priorityId": "priority_id",
    "typeId": "type_id",
    "refs": "refs",
}

# Fields carried over from the source case when copying.
_COPIED_FIELDS = ("custom_preconds", "priority_id", "type_id", "refs")


def _copy_body(source: Mapping[str, Any], args: Mapping[str, Any]) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "title": args.get("newTitle") or f"Copy of {source.get('title', '')}",
        "custom_steps": args.get("newSteps", source.get("custom_steps")),
        "custom_expected": args.get("newExpectedResult", source.get("custom_expected")),
    }
    for field in _COPIED_FIELDS:
        if source.get(field) is not None:
            data[field] = source[field]
    return data


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_case(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_case/{args['caseId']}")

    async def get_cases(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_cases/{args['projectId']}",
            "cases",
            suite_id=args.get("suiteId"),
            section_id=args.get("sectionId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_case(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_case/{args['sectionId']}", compact(args, _CASE_FIELDS))

    async def update_case(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_case/{args['caseId']}", compact(args, _CASE_FIELDS))

    async def delete_case(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_case/{args['caseId']}")
        return done(f"Test case {args['caseId']} deleted")

    async def copy_cases_to_section(args: Mapping[str, Any]) -> Any:
        source = await client.get(f"get_case/{args['sourceCaseId']}") or {}
        section_id = args.get("targetSectionId", source.get("section_id"))
        return await client.post(f"add_case/{section_id}", _copy_body(source, args))

    case_id = param("caseId", "The unique identifier of the test case.", INT)

    return [
        OperationDescriptor(
            name="get_case",
            description=(
                "Retrieves a specific test case by its ID, with title, steps, expected results, "
                "preconditions, priority, type and custom fields. Use it to inspect a case "
                "before modifying it or adding it to a run."
            ),
            category=CATEGORY,
            keywords=("get", "retrieve", "fetch", "show", "view", "case", "details", "read"),
            examples=(
                "execute_tool('get_case', {caseId: 123})",
                "execute_tool('get_case', {caseId: 456})",
            ),
            parameters=(case_id,),
            invoke=get_case,
        ),
        OperationDescriptor(
            name="get_cases",
            description=(
                "Lists the test cases of a project, optionally narrowed to a suite or section. "
                "Results are paginated with limit and offset."
            ),
            category=CATEGORY,
            keywords=("list", "all", "cases", "search", "browse", "section", "suite"),
            examples=(
                "execute_tool('get_cases', {projectId: 1})",
                "execute_tool('get_cases', {projectId: 1, suiteId: 5, sectionId: 10})",
            ),
            parameters=(
                param("projectId", "The ID of the project to retrieve test cases from.", INT),
                param(
                    "suiteId",
                    "The ID of the test suite (required for projects using multiple suites mode).",
                    INT,
                    required=False,
                ),
                param("sectionId", "Only return cases from this section.", INT, required=False),
                LIMIT,
                OFFSET,
            ),
            invoke=get_cases,
        ),
        OperationDescriptor(
            name="add_case",
            description=(
                "Creates a new test case in a section with title, steps, expected result, "
                "preconditions, priority, type and references. Use get_sections to find the "
                "section ID first."
            ),
            category=CATEGORY,
            keywords=("add", "create", "new", "write", "case", "test"),
            examples=(
                "execute_tool('add_case', {sectionId: 10, title: 'Login with valid credentials'})",
                "execute_tool('add_case', {sectionId: 10, title: 'Logout', priorityId: 3, refs: 'PROJ-12'})",
            ),
            parameters=(
                param("sectionId", "The ID of the section where the test case will be created.", INT),
                param("title", "The title of the test case.", STR),
                param("steps", "The test steps in plain text.", STR, required=False),
                param("expectedResult", "What should happen when the test passes.", STR, required=False),
                param("preconditions", "Preconditions for executing the test.", STR, required=False),
                param("priorityId", "Priority ID: 1=Low, 2=Medium, 3=High, 4=Critical.", INT, required=False),
                param("typeId", "Case type ID (see get_case_types).", INT, required=False),
                param("refs", "Comma-separated references, e.g. 'PROJ-123, PROJ-456'.", STR, required=False),
            ),
            invoke=add_case,
        ),
        OperationDescriptor(
            name="update_case",
            description=(
                "Updates an existing test case. Only the supplied fields change: title, steps, "
                "expected result, preconditions, priority, type or references."
            ),
            category=CATEGORY,
            keywords=("update", "modify", "edit", "change", "case"),
            examples=("execute_tool('update_case', {caseId: 123, title: 'Updated title'})",),
            parameters=(
                case_id,
                param("title", "New title.", STR, required=False),
                param("steps", "Updated test steps.", STR, required=False),
                param("expectedResult", "Updated expected result.", STR, required=False),
                param("preconditions", "Updated preconditions.", STR, required=False),
                param("priorityId", "New priority ID: 1=Low, 2=Medium, 3=High, 4=Critical.", INT, required=False),
                param("typeId", "New case type ID.", INT, required=False),
                param("refs", "Updated references.", STR, required=False),
            ),
            invoke=update_case,
        ),
        OperationDescriptor(
            name="delete_case",
            description="Permanently deletes a test case. This cannot be undone.",
            category=CATEGORY,
            keywords=("delete", "remove", "case"),
            examples=("execute_tool('delete_case', {caseId: 123})",),
            parameters=(case_id,),
            invoke=delete_case,
        ),
        OperationDescriptor(
            name="copy_cases_to_section",
            description=(
                "Creates a copy of an existing test case, optionally in a different section and "
                "with a new title, steps or expected result. Other fields are copied unchanged."
            ),
            category=CATEGORY,
            keywords=("clone", "copy", "duplicate", "replicate", "case", "template"),
            examples=(
                "execute_tool('copy_cases_to_section', {sourceCaseId: 123})",
                "execute_tool('copy_cases_to_section', {sourceCaseId: 456, targetSectionId: 10, newTitle: 'Modified test case'})",
            ),
            parameters=(
                param("sourceCaseId", "The ID of the test case to copy.", INT),
                param(
                    "targetSectionId",
                    "Target section ID; the source case's section when omitted.",
                    INT,
                    required=False,
                ),
                param("newTitle", "Title for the copy; 'Copy of <title>' when omitted.", STR, required=False),
                param("newSteps", "Steps for the copy; the source steps when omitted.", STR, required=False),
                param(
                    "newExpectedResult",
                    "Expected result for the copy; the source value when omitted.",
                    STR,
                    required=False,
                ),
            ),
            invoke=copy_cases_to_section,
        ),
    ]
