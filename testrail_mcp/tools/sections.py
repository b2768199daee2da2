"""Section operations.

Sections group test cases inside a suite and can be nested.
"""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient, compact
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import BOOL, INT, LIMIT, OFFSET, STR, done

CATEGORY = "sections"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_section(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_section/{args['sectionId']}")

    async def get_sections(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_sections/{args['projectId']}",
            "sections",
            suite_id=args.get("suiteId"),
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def add_section(args: Mapping[str, Any]) -> Any:
        data = compact(
            args,
            {"name": "name", "description": "description", "suiteId": "suite_id", "parentId": "parent_id"},
        )
        return await client.post(f"add_section/{args['projectId']}", data)

    async def update_section(args: Mapping[str, Any]) -> Any:
        data = compact(args, {"name": "name", "description": "description"})
        return await client.post(f"update_section/{args['sectionId']}", data)

    async def delete_section(args: Mapping[str, Any]) -> Any:
        soft = args.get("soft", False)
        await client.post(f"delete_section/{args['sectionId']}", soft=1 if soft else None)
        if soft:
            return done(f"Soft delete of section {args['sectionId']} previewed; nothing was removed")
        return done(f"Section {args['sectionId']} deleted")

    async def move_section(args: Mapping[str, Any]) -> Any:
        data = compact(args, {"parentId": "parent_id", "afterId": "after_id"})
        return await client.post(f"move_section/{args['sectionId']}", data)

    section_id = param("sectionId", "The unique identifier of the section.", INT)
    project_id = param("projectId", "The ID of the project.", INT)

    return [
        OperationDescriptor(
            name="get_section",
            description="Retrieves a section by ID: name, description, suite, parent and depth.",
            category=CATEGORY,
            keywords=("get", "fetch", "show", "section", "folder"),
            examples=("execute_tool('get_section', {sectionId: 10})",),
            parameters=(section_id,),
            invoke=get_section,
        ),
        OperationDescriptor(
            name="get_sections",
            description=(
                "Lists the sections of a project or suite. Use it to find the section ID "
                "needed when creating test cases."
            ),
            category=CATEGORY,
            keywords=("list", "all", "sections", "folders", "structure", "tree"),
            examples=(
                "execute_tool('get_sections', {projectId: 1})",
                "execute_tool('get_sections', {projectId: 1, suiteId: 5})",
            ),
            parameters=(
                project_id,
                param("suiteId", "The ID of the test suite (optional in single suite mode).", INT, required=False),
                LIMIT,
                OFFSET,
            ),
            invoke=get_sections,
        ),
        OperationDescriptor(
            name="add_section",
            description="Creates a new section, optionally nested under a parent section.",
            category=CATEGORY,
            keywords=("add", "create", "new", "section", "folder", "group"),
            examples=(
                "execute_tool('add_section', {projectId: 1, name: 'Login'})",
                "execute_tool('add_section', {projectId: 1, suiteId: 5, parentId: 10, name: 'OAuth'})",
            ),
            parameters=(
                project_id,
                param("name", "Name of the section.", STR),
                param("description", "Description of the section.", STR, required=False),
                param("suiteId", "Suite ID (required in multiple suite mode).", INT, required=False),
                param("parentId", "Parent section ID for nesting.", INT, required=False),
            ),
            invoke=add_section,
        ),
        OperationDescriptor(
            name="update_section",
            description="Renames a section or changes its description.",
            category=CATEGORY,
            keywords=("update", "modify", "rename", "edit", "section"),
            examples=("execute_tool('update_section', {sectionId: 10, name: 'Authentication'})",),
            parameters=(
                section_id,
                param("name", "New name.", STR, required=False),
                param("description", "New description.", STR, required=False),
            ),
            invoke=update_section,
        ),
        OperationDescriptor(
            name="delete_section",
            description=(
                "Deletes a section including its subsections and test cases. "
                "Set soft=true to only preview what would be removed."
            ),
            category=CATEGORY,
            keywords=("delete", "remove", "section"),
            examples=("execute_tool('delete_section', {sectionId: 10})",),
            parameters=(
                section_id,
                param("soft", "Preview the deletion without removing data.", BOOL, required=False, default="false"),
            ),
            invoke=delete_section,
        ),
        OperationDescriptor(
            name="move_section",
            description=(
                "Moves a section to another parent or position within the same suite. "
                "Omit parentId to move it to the root level."
            ),
            category=CATEGORY,
            keywords=("move", "reorder", "relocate", "section", "parent"),
            examples=("execute_tool('move_section', {sectionId: 10, parentId: 3, afterId: 7})",),
            parameters=(
                section_id,
                param("parentId", "New parent section ID; omit for root.", INT, required=False),
                param("afterId", "Place the section after this sibling section ID.", INT, required=False),
            ),
            invoke=move_section,
        ),
    ]
