"""Report template operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT

CATEGORY = "reports"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_reports(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_reports/{args['projectId']}")

    async def run_report(args: Mapping[str, Any]) -> Any:
        return await client.get(f"run_report/{args['reportTemplateId']}")

    async def get_cross_project_reports(args: Mapping[str, Any]) -> Any:
        return await client.get("get_cross_project_reports")

    async def run_cross_project_report(args: Mapping[str, Any]) -> Any:
        return await client.get(f"run_cross_project_report/{args['reportTemplateId']}")

    return [
        OperationDescriptor(
            name="get_reports",
            description=(
                "Lists the API-accessible report templates of a project. Only templates with "
                "'On-demand via the API' enabled are returned."
            ),
            category=CATEGORY,
            keywords=("list", "reports", "templates", "project", "analytics"),
            examples=("execute_tool('get_reports', {projectId: 1})",),
            parameters=(param("projectId", "The ID of the project.", INT),),
            invoke=get_reports,
        ),
        OperationDescriptor(
            name="run_report",
            description="Executes a project report template and returns links to the generated report.",
            category=CATEGORY,
            keywords=("run", "generate", "execute", "report", "summary", "analytics"),
            examples=("execute_tool('run_report', {reportTemplateId: 12})",),
            parameters=(param("reportTemplateId", "The ID of the report template.", INT),),
            invoke=run_report,
        ),
        OperationDescriptor(
            name="get_cross_project_reports",
            description="Lists the API-accessible cross-project report templates.",
            category=CATEGORY,
            keywords=("list", "cross", "project", "reports", "templates"),
            examples=("execute_tool('get_cross_project_reports', {})",),
            invoke=get_cross_project_reports,
        ),
        OperationDescriptor(
            name="run_cross_project_report",
            description="Executes a cross-project report template and returns links to the generated report.",
            category=CATEGORY,
            keywords=("run", "generate", "cross", "project", "report"),
            examples=("execute_tool('run_cross_project_report', {reportTemplateId: 2})",),
            parameters=(param("reportTemplateId", "The ID of the cross-project report template.", INT),),
            invoke=run_cross_project_report,
        ),
    ]
