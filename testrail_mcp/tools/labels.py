"""Label operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, LIMIT, OBJ, OFFSET

CATEGORY = "labels"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_label(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_label/{args['labelId']}")

    async def get_labels(args: Mapping[str, Any]) -> Any:
        return await client.get_list(
            f"get_labels/{args['projectId']}",
            "labels",
            limit=args.get("limit"),
            offset=args.get("offset"),
        )

    async def update_label(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_label/{args['labelId']}", dict(args["label"]))

    label_id = param("labelId", "The ID of the label.", INT)

    return [
        OperationDescriptor(
            name="get_label",
            description="Retrieves a label by ID.",
            category=CATEGORY,
            keywords=("get", "label", "tag"),
            examples=("execute_tool('get_label', {labelId: 1})",),
            parameters=(label_id,),
            invoke=get_label,
        ),
        OperationDescriptor(
            name="get_labels",
            description="Lists the labels (tags) defined in a project.",
            category=CATEGORY,
            keywords=("list", "labels", "tags"),
            examples=("execute_tool('get_labels', {projectId: 1})",),
            parameters=(param("projectId", "The ID of the project.", INT), LIMIT, OFFSET),
            invoke=get_labels,
        ),
        OperationDescriptor(
            name="update_label",
            description="Renames a label. The title may be at most 20 characters.",
            category=CATEGORY,
            keywords=("update", "rename", "label", "tag"),
            examples=("execute_tool('update_label', {labelId: 1, label: {title: 'flaky'}})",),
            parameters=(label_id, param("label", "Label data with key: title (required).", OBJ)),
            invoke=update_label,
        ),
    ]
