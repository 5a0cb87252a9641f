"""
Database Tools — Notion database operations

Tools:
  list-databases   — Databases shared with the integration, newest first
  query-database   — Filter/sort the rows of a database
  create-database  — New inline database under a page
  update-database  — Change a database's title, description or schema
  get-database     — Retrieve a database's schema
"""

from typing import Any, Dict, List

from notion_mcp.tools.arguments import (
    copy_nonempty,
    copy_present,
    DEFAULT_PAGE_SIZE,
    page_size,
    require,
    require_id,
)

DEFAULT_DATABASE_EMOJI = "📄"

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "list-databases",
        "description": "List all databases the integration has access to",
        "inputSchema": {
            "type": "object",
            "properties": {},
        },
    },
    {
        "name": "query-database",
        "description": "Query a database",
        "inputSchema": {
            "type": "object",
            "properties": {
                "database_id": {
                    "type": "string",
                    "description": "ID of the database to query",
                },
                "filter": {
                    "type": "object",
                    "description": "Optional filter criteria",
                },
                "sorts": {
                    "type": "array",
                    "description": "Optional sort criteria",
                },
                "start_cursor": {
                    "type": "string",
                    "description": "Optional cursor for pagination",
                },
                "page_size": {
                    "type": "number",
                    "description": "Number of results per page",
                    "default": 100,
                },
            },
            "required": ["database_id"],
        },
    },
    {
        "name": "create-database",
        "description": "Create a new database",
        "inputSchema": {
            "type": "object",
            "properties": {
                "parent_id": {
                    "type": "string",
                    "description": "ID of the parent page",
                },
                "title": {
                    "type": "array",
                    "description": "Database title as rich text array",
                },
                "properties": {
                    "type": "object",
                    "description": "Database properties schema",
                },
                "icon": {
                    "type": "object",
                    "description": "Optional icon for the database",
                },
                "cover": {
                    "type": "object",
                    "description": "Optional cover for the database",
                },
            },
            "required": ["parent_id", "title", "properties"],
        },
    },
    {
        "name": "update-database",
        "description": "Update an existing database",
        "inputSchema": {
            "type": "object",
            "properties": {
                "database_id": {
                    "type": "string",
                    "description": "ID of the database to update",
                },
                "title": {
                    "type": "array",
                    "description": "Optional new title as rich text array",
                },
                "description": {
                    "type": "array",
                    "description": "Optional new description as rich text array",
                },
                "properties": {
                    "type": "object",
                    "description": "Optional updated properties schema",
                },
            },
            "required": ["database_id"],
        },
    },
    {
        "name": "get-database",
        "description": "Retrieve a database's schema by its ID",
        "inputSchema": {
            "type": "object",
            "properties": {
                "database_id": {
                    "type": "string",
                    "description": "ID of the database to retrieve",
                },
            },
            "required": ["database_id"],
        },
    },
]


async def _list_databases(notion, args: Dict) -> Any:
    response = await notion.search(
        filter={"property": "object", "value": "database"},
        page_size=DEFAULT_PAGE_SIZE,
        sort={"direction": "descending", "timestamp": "last_edited_time"},
    )
    return response["results"]


async def _query_database(notion, args: Dict) -> Any:
    params = {
        "database_id": require(args, "database_id"),
        "page_size": page_size(args),
    }
    copy_nonempty(params, args, ("filter", "sorts", "start_cursor"))
    return await notion.databases.query(**params)


def database_icon(icon: Dict[str, Any]) -> Dict[str, Any]:
    """Fill in the default emoji when an emoji icon arrives without one."""
    if icon.get("type") == "emoji" and not icon.get("emoji"):
        return {**icon, "emoji": DEFAULT_DATABASE_EMOJI}
    return icon


async def _create_database(notion, args: Dict) -> Any:
    params = {
        "parent": {
            "type": "page_id",
            "page_id": require_id(args, "parent_id"),
        },
        "title": require(args, "title"),
        "properties": require(args, "properties"),
    }
    if args.get("icon"):
        params["icon"] = database_icon(args["icon"])
    copy_nonempty(params, args, ("cover",))
    return await notion.databases.create(**params)


async def _update_database(notion, args: Dict) -> Any:
    params = {"database_id": require(args, "database_id")}
    copy_present(params, args, ("title", "description", "properties"))
    return await notion.databases.update(**params)


async def _get_database(notion, args: Dict) -> Any:
    return await notion.databases.retrieve(database_id=require(args, "database_id"))


HANDLERS = {
    "list-databases": _list_databases,
    "query-database": _query_database,
    "create-database": _create_database,
    "update-database": _update_database,
    "get-database": _get_database,
}
