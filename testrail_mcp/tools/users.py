"""User, group and role operations."""

from typing import Any, List, Mapping

from testrail_mcp.client import TestrailClient
from testrail_mcp.gateway.catalog import OperationDescriptor, param
from testrail_mcp.tools._common import INT, OBJ, STR, done

CATEGORY = "users"


def descriptors(client: TestrailClient) -> List[OperationDescriptor]:
    async def get_user(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_user/{args['userId']}")

    async def get_current_user(args: Mapping[str, Any]) -> Any:
        return await client.get("get_current_user")

    async def get_user_by_email(args: Mapping[str, Any]) -> Any:
        return await client.get("get_user_by_email", email=args["email"])

    async def get_users(args: Mapping[str, Any]) -> Any:
        project_id = args.get("projectId")
        uri = f"get_users/{project_id}" if project_id is not None else "get_users"
        return await client.get_list(uri, "users")

    async def get_group(args: Mapping[str, Any]) -> Any:
        return await client.get(f"get_group/{args['groupId']}")

    async def get_groups(args: Mapping[str, Any]) -> Any:
        return await client.get_list("get_groups", "groups")

    async def add_group(args: Mapping[str, Any]) -> Any:
        return await client.post("add_group", dict(args["group"]))

    async def update_group(args: Mapping[str, Any]) -> Any:
        return await client.post(f"update_group/{args['groupId']}", dict(args["group"]))

    async def delete_group(args: Mapping[str, Any]) -> Any:
        await client.post(f"delete_group/{args['groupId']}")
        return done(f"Group {args['groupId']} deleted")

    async def get_roles(args: Mapping[str, Any]) -> Any:
        return await client.get_list("get_roles", "roles")

    group_id = param("groupId", "The ID of the user group.", INT)

    return [
        OperationDescriptor(
            name="get_user",
            description="Retrieves a user by ID: name, email, role and active state.",
            category=CATEGORY,
            keywords=("get", "fetch", "user", "person", "member", "account"),
            examples=("execute_tool('get_user', {userId: 3})",),
            parameters=(param("userId", "The unique ID of the user.", INT),),
            invoke=get_user,
        ),
        OperationDescriptor(
            name="get_current_user",
            description="Retrieves the user the server authenticates as. Useful to find your own user ID.",
            category=CATEGORY,
            keywords=("current", "me", "myself", "whoami", "user", "account"),
            examples=("execute_tool('get_current_user', {})",),
            invoke=get_current_user,
        ),
        OperationDescriptor(
            name="get_user_by_email",
            description="Looks up a user by email address.",
            category=CATEGORY,
            keywords=("find", "lookup", "user", "email", "address"),
            examples=("execute_tool('get_user_by_email', {email: 'jane@example.com'})",),
            parameters=(param("email", "The email address of the user.", STR),),
            invoke=get_user_by_email,
        ),
        OperationDescriptor(
            name="get_users",
            description=(
                "Lists users. Non-administrators must pass a project ID and get the users "
                "with access to that project."
            ),
            category=CATEGORY,
            keywords=("list", "all", "users", "people", "members", "team", "assignees"),
            examples=("execute_tool('get_users', {})", "execute_tool('get_users', {projectId: 1})"),
            parameters=(
                param("projectId", "Restrict to users with access to this project.", INT, required=False),
            ),
            invoke=get_users,
        ),
        OperationDescriptor(
            name="get_group",
            description="Retrieves a user group by ID with its member user IDs.",
            category=CATEGORY,
            keywords=("get", "group", "team", "members"),
            examples=("execute_tool('get_group', {groupId: 2})",),
            parameters=(group_id,),
            invoke=get_group,
        ),
        OperationDescriptor(
            name="get_groups",
            description="Lists all user groups.",
            category=CATEGORY,
            keywords=("list", "all", "groups", "teams"),
            examples=("execute_tool('get_groups', {})",),
            invoke=get_groups,
        ),
        OperationDescriptor(
            name="add_group",
            description="Creates a user group. The group map takes name and user_ids (array of user IDs).",
            category=CATEGORY,
            keywords=("add", "create", "new", "group", "team"),
            examples=("execute_tool('add_group', {group: {name: 'QA', user_ids: [1, 2]}})",),
            parameters=(param("group", "Group data: name (required) and user_ids (required).", OBJ),),
            invoke=add_group,
        ),
        OperationDescriptor(
            name="update_group",
            description="Updates a user group. user_ids replaces the full member list.",
            category=CATEGORY,
            keywords=("update", "modify", "rename", "group", "members"),
            examples=("execute_tool('update_group', {groupId: 2, group: {user_ids: [1, 2, 5]}})",),
            parameters=(group_id, param("group", "Group data: name and/or user_ids.", OBJ)),
            invoke=update_group,
        ),
        OperationDescriptor(
            name="delete_group",
            description="Deletes a user group. The users themselves are kept.",
            category=CATEGORY,
            keywords=("delete", "remove", "group"),
            examples=("execute_tool('delete_group', {groupId: 2})",),
            parameters=(group_id,),
            invoke=delete_group,
        ),
        OperationDescriptor(
            name="get_roles",
            description="Lists the user roles (Lead, Tester, Designer ...) with their IDs.",
            category=CATEGORY,
            keywords=("list", "roles", "permissions", "access"),
            examples=("execute_tool('get_roles', {})",),
            invoke=get_roles,
        ),
    ]
