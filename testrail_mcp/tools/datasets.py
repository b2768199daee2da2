"""Dataset and variable operations (data-driven testing)."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, OBJ, done

CATEGORY = "datasets"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_dataset(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_dataset/{args['datasetId']}")

    async def get_datasets(args: Mapping[str, Any]) -> Any:
        return await client.get_list(f"get_datasets/{args['projectId']}", "datasets")

    async def add_dataset(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_dataset/{args['projectId']}", dict(args["dataset"]))

    async def update_dataset(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_dataset/{args['datasetId']}", dict(args["dataset"]))

    async def delete_dataset(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_dataset/{args['datasetId']}")
        return done(f"Dataset {args['datasetId']} deleted")

    async def get_variables(args: Mapping[str, Any]) -> Any:
        return await client.get_list(f"get_variables/{args['projectId']}", "variables")

    async def add_variable(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_variable/{args['projectId']}", dict(args["variable"]))

    async def update_variable(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_variable/{args['variableId']}", dict(args["variable"]))

    async def delete_variable(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_variable/{args['variableId']}")
        return done(f"Variable {args['variableId']} deleted")

    dataset_id = param("datasetId", "The ID of the dataset.", INT)
    variable_id = param("variableId", "The ID of the variable.", INT)
    project_id = param("projectId", "The ID of the project.", INT)

    return [
        OperationDescriptor(
            name="get_dataset",
            description="Retrieves a dataset by ID with its variable values.",
            category=CATEGORY,
            keywords=("get", "dataset", "data", "parameters", "values"),
            examples=("execute_tool('get_dataset', {datasetId: 2})",),
            parameters=(dataset_id,),
            invoke=get_dataset,
        ),
        OperationDescriptor(
            name="get_datasets",
            description="Lists the datasets of a project used for data-driven testing.",
            category=CATEGORY,
            keywords=("list", "datasets", "data", "driven", "parameterized"),
            examples=("execute_tool('get_datasets', {projectId: 1})",),
            parameters=(project_id,),
            invoke=get_datasets,
        ),
        OperationDescriptor(
            name="add_dataset",
            description=(
                "Creates a dataset. The map takes name and variables, a list of "
                "{name, value} pairs for the project's variables."
            ),
            category=CATEGORY,
            keywords=("add", "create", "new", "dataset", "data"),
            examples=(
                "execute_tool('add_dataset', {projectId: 1, dataset: {name: 'EU users', "
                "variables: [{name: 'locale', value: 'de'}]}})",
            ),
            parameters=(project_id, param("dataset", "Dataset data: name and variables.", OBJ)),
            invoke=add_dataset,
        ),
        OperationDescriptor(
            name="update_dataset",
            description="Updates a dataset's name or variable values.",
            category=CATEGORY,
            keywords=("update", "modify", "edit", "dataset"),
            examples=("execute_tool('update_dataset', {datasetId: 2, dataset: {name: 'EU customers'}})",),
            parameters=(dataset_id, param("dataset", "Dataset fields to change.", OBJ)),
            invoke=update_dataset,
        ),
        OperationDescriptor(
            name="delete_dataset",
            description="Deletes a dataset.",
            category=CATEGORY,
            keywords=("delete", "remove", "dataset"),
            examples=("execute_tool('delete_dataset', {datasetId: 2})",),
            parameters=(dataset_id,),
            invoke=delete_dataset,
        ),
        OperationDescriptor(
            name="get_variables",
            description="Lists the variables defined for a project's datasets.",
            category=CATEGORY,
            keywords=("list", "variables", "dataset", "parameters"),
            examples=("execute_tool('get_variables', {projectId: 1})",),
            parameters=(project_id,),
            invoke=get_variables,
        ),
        OperationDescriptor(
            name="add_variable",
            description="Adds a variable to a project's datasets.",
            category=CATEGORY,
            keywords=("add", "create", "variable", "parameter"),
            examples=("execute_tool('add_variable', {projectId: 1, variable: {name: 'locale'}})",),
            parameters=(project_id, param("variable", "Variable data with key: name (required).", OBJ)),
            invoke=add_variable,
        ),
        OperationDescriptor(
            name="update_variable",
            description="Renames a dataset variable.",
            category=CATEGORY,
            keywords=("update", "rename", "variable"),
            examples=("execute_tool('update_variable', {variableId: 6, variable: {name: 'language'}})",),
            parameters=(variable_id, param("variable", "Variable data with key: name (required).", OBJ)),
            invoke=update_variable,
        ),
        OperationDescriptor(
            name="delete_variable",
            description="Deletes a dataset variable and its values in every dataset.",
            category=CATEGORY,
            keywords=("delete", "remove", "variable"),
            examples=("execute_tool('delete_variable', {variableId: 6})",),
            parameters=(variable_id,),
            invoke=delete_variable,
        ),
    ]
