"""Configuration group and configuration operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, OBJ, done

CATEGORY = "configurations"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_configs(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_configs/{args['projectId']}")

    async def add_config_group(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_config_group/{args['projectId']}", dict(args["configGroup"]))

    async def add_config(args: Mapping[str, Any]) -> Any:
        return await client.post(f"add_config/{args['configGroupId']}", dict(args["config"]))

    async def update_config_group(args: Mapping[str, Any]) -> Any:
        return await client.post(
            f"update_config_group/{args['configGroupId']}", dict(args["configGroup"])
        )

    async def update_config(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_config/{args['configId']}", dict(args["config"]))

    async def delete_config_group(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_config_group/{args['configGroupId']}")
        return done(f"Configuration group {args['configGroupId']} deleted")

    async def delete_config(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_config/{args['configId']}")
        return done(f"Configuration {args['configId']} deleted")

    group_id = param("configGroupId", "The ID of the configuration group.", INT)
    config_id = param("configId", "The ID of the configuration.", INT)

    return [
        OperationDescriptor(
            name="get_configs",
            description=(
                "Lists the configuration groups of a project with their configurations "
                "(e.g. Browsers: Chrome, Firefox; OS: Linux, Windows)."
            ),
            category=CATEGORY,
            keywords=("list", "configs", "configurations", "browsers", "platforms", "environments"),
            examples=("execute_tool('get_configs', {projectId: 1})",),
            parameters=(param("projectId", "The ID of the project.", INT),),
            invoke=get_configs,
        ),
        OperationDescriptor(
            name="add_config_group",
            description="Creates a configuration group in a project, e.g. 'Browsers'.",
            category=CATEGORY,
            keywords=("add", "create", "config", "group", "configuration"),
            examples=("execute_tool('add_config_group', {projectId: 1, configGroup: {name: 'Browsers'}})",),
            parameters=(
                param("projectId", "The ID of the project.", INT),
                param("configGroup", "Configuration group data with key: name (required).", OBJ),
            ),
            invoke=add_config_group,
        ),
        OperationDescriptor(
            name="add_config",
            description="Adds a configuration to a configuration group, e.g. 'Chrome' to 'Browsers'.",
            category=CATEGORY,
            keywords=("add", "create", "config", "configuration", "browser", "platform"),
            examples=("execute_tool('add_config', {configGroupId: 3, config: {name: 'Chrome'}})",),
            parameters=(group_id, param("config", "Configuration data with key: name (required).", OBJ)),
            invoke=add_config,
        ),
        OperationDescriptor(
            name="update_config_group",
            description="Renames a configuration group.",
            category=CATEGORY,
            keywords=("update", "rename", "config", "group"),
            examples=("execute_tool('update_config_group', {configGroupId: 3, configGroup: {name: 'Web browsers'}})",),
            parameters=(group_id, param("configGroup", "Configuration group data with key: name.", OBJ)),
            invoke=update_config_group,
        ),
        OperationDescriptor(
            name="update_config",
            description="Renames a configuration.",
            category=CATEGORY,
            keywords=("update", "rename", "config", "configuration"),
            examples=("execute_tool('update_config', {configId: 8, config: {name: 'Chromium'}})",),
            parameters=(config_id, param("config", "Configuration data with key: name.", OBJ)),
            invoke=update_config,
        ),
        OperationDescriptor(
            name="delete_config_group",
            description="Deletes a configuration group and all its configurations.",
            category=CATEGORY,
            keywords=("delete", "remove", "config", "group"),
            examples=("execute_tool('delete_config_group', {configGroupId: 3})",),
            parameters=(group_id,),
            invoke=delete_config_group,
        ),
        OperationDescriptor(
            name="delete_config",
            description="Deletes a single configuration.",
            category=CATEGORY,
            keywords=("delete", "remove", "config", "configuration"),
            examples=("execute_tool('delete_config', {configId: 8})",),
            parameters=(config_id,),
            invoke=delete_config,
        ),
    ]
