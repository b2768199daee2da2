"""Custom case and result field operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import OBJ

CATEGORY = "custom-fields"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_case_fields(args: Mapping[str, Any]) -> Any:
        return await client.get("get_case_fields")

    async def add_case_field(args: Mapping[str, Any]) -> Any:
        return await client.post("add_case_field", dict(args["caseField"]))

    async def get_result_fields(args: Mapping[str, Any]) -> Any:
        return await client.get("get_result_fields")

    return [
        OperationDescriptor(
            name="get_case_fields",
            description=(
                "Lists the custom fields available for test cases, with their system names "
                "(custom_*), types, configurations and the projects they apply to."
            ),
            category=CATEGORY,
            keywords=("case", "fields", "custom", "schema", "list"),
            examples=("execute_tool('get_case_fields', {})",),
            invoke=get_case_fields,
        ),
        OperationDescriptor(
            name="add_case_field",
            description=(
                "Creates a new custom case field. The field map takes type (1-12, e.g. 1=String, "
                "6=Dropdown, 12=Multi-select), name, label, description, include_all and configs."
            ),
            category=CATEGORY,
            keywords=("add", "create", "new", "case", "field", "custom"),
            examples=(
                "execute_tool('add_case_field', {caseField: {type: 1, name: 'component', label: 'Component', "
                "configs: [{context: {is_global: true}, options: {is_required: false}}]}})",
            ),
            parameters=(
                param(
                    "caseField",
                    "Case field configuration: type, name, label, description, configs.",
                    OBJ,
                ),
            ),
            invoke=add_case_field,
        ),
        OperationDescriptor(
            name="get_result_fields",
            description="Lists the custom fields available for test results.",
            category=CATEGORY,
            keywords=("result", "fields", "custom", "schema", "list"),
            examples=("execute_tool('get_result_fields', {})",),
            invoke=get_result_fields,
        ),
    ]
