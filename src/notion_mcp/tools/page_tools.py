"""
Page Tools — Notion page operations

Tools:
  create-page  — New row in a database
  update-page  — Change properties or archive a page
  get-page     — Retrieve a page by ID
"""

from typing import Any, Dict, List

from notion_mcp.tools.arguments import copy_nonempty, copy_present, require, require_id

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "create-page",
        "description": "Create a new page in a database",
        "inputSchema": {
            "type": "object",
            "properties": {
                "parent_id": {
                    "type": "string",
                    "description": "ID of the parent database",
                },
                "properties": {
                    "type": "object",
                    "description": "Page properties",
                },
                "children": {
                    "type": "array",
                    "description": "Optional content blocks",
                },
            },
            "required": ["parent_id", "properties"],
        },
    },
    {
        "name": "update-page",
        "description": "Update an existing page",
        "inputSchema": {
            "type": "object",
            "properties": {
                "page_id": {
                    "type": "string",
                    "description": "ID of the page to update",
                },
                "properties": {
                    "type": "object",
                    "description": "Updated page properties",
                },
                "archived": {
                    "type": "boolean",
                    "description": "Whether to archive the page",
                },
            },
            "required": ["page_id", "properties"],
        },
    },
    {
        "name": "get-page",
        "description": "Retrieve a page by its ID",
        "inputSchema": {
            "type": "object",
            "properties": {
                "page_id": {
                    "type": "string",
                    "description": "ID of the page to retrieve",
                },
            },
            "required": ["page_id"],
        },
    },
]


async def _create_page(notion, args: Dict) -> Any:
    params = {
        "parent": {"database_id": require(args, "parent_id")},
        "properties": require(args, "properties"),
    }
    copy_nonempty(params, args, ("children",))
    return await notion.pages.create(**params)


async def _update_page(notion, args: Dict) -> Any:
    params = {
        "page_id": require_id(args, "page_id"),
        "properties": require(args, "properties"),
    }
    copy_present(params, args, ("archived",))
    return await notion.pages.update(**params)


async def _get_page(notion, args: Dict) -> Any:
    return await notion.pages.retrieve(page_id=require_id(args, "page_id"))


HANDLERS = {
    "create-page": _create_page,
    "update-page": _update_page,
    "get-page": _get_page,
}
