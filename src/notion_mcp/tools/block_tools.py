"""
Block Tools — Notion block operations

Tools:
  get-block-children     — Child blocks of a page or block (one page of results)
  append-block-children  — Append new blocks under a parent
  update-block           — Replace a block's typed content or archive it
  get-block              — Retrieve a block by ID

update-block does not build the request field from the caller's string.
The block type is resolved against BlockType first, so only types the
Notion API can update are ever sent.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from notion_mcp.tools.arguments import (
    copy_nonempty,
    optional_id,
    page_size,
    require,
    require_id,
)


class BlockType(str, Enum):
    """Block types accepted by the Notion block update endpoint."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    QUOTE = "quote"
    CALLOUT = "callout"
    CODE = "code"
    EQUATION = "equation"
    DIVIDER = "divider"
    BREADCRUMB = "breadcrumb"
    TABLE_OF_CONTENTS = "table_of_contents"
    TABLE = "table"
    TABLE_ROW = "table_row"
    COLUMN = "column"
    TEMPLATE = "template"
    SYNCED_BLOCK = "synced_block"
    LINK_TO_PAGE = "link_to_page"
    BOOKMARK = "bookmark"
    EMBED = "embed"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    FILE = "file"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: Any) -> "BlockType":
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unsupported block type: {value}") from None


class BlockUpdate:
    """Typed content for one block update: the variant plus its payload."""

    __slots__ = ("block_type", "content", "archived")

    def __init__(self, block_type: BlockType, content: Dict[str, Any], archived: Optional[bool] = None):
        self.block_type = block_type
        self.content = content
        self.archived = archived

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "BlockUpdate":
        content = require(args, "content")
        if not isinstance(content, dict):
            raise ValueError("Argument content must be an object")
        return cls(
            block_type=BlockType.parse(require(args, "block_type")),
            content=content,
            archived=args.get("archived"),
        )

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {self.block_type.value: self.content}
        if self.archived is not None:
            params["archived"] = self.archived
        return params


TOOLS: List[Dict[str, Any]] = [
    {
        "name": "get-block-children",
        "description": "Retrieve the children blocks of a block",
        "inputSchema": {
            "type": "object",
            "properties": {
                "block_id": {
                    "type": "string",
                    "description": "ID of the block (page or block)",
                },
                "start_cursor": {
                    "type": "string",
                    "description": "Cursor for pagination",
                },
                "page_size": {
                    "type": "number",
                    "description": "Number of results per page",
                    "default": 100,
                },
            },
            "required": ["block_id"],
        },
    },
    {
        "name": "append-block-children",
        "description": "Append blocks to a parent block",
        "inputSchema": {
            "type": "object",
            "properties": {
                "block_id": {
                    "type": "string",
                    "description": "ID of the parent block (page or block)",
                },
                "children": {
                    "type": "array",
                    "description": "List of block objects to append",
                },
                "after": {
                    "type": "string",
                    "description": "Optional ID of an existing block to append after",
                },
            },
            "required": ["block_id", "children"],
        },
    },
    {
        "name": "update-block",
        "description": "Update a block's content or archive status",
        "inputSchema": {
            "type": "object",
            "properties": {
                "block_id": {
                    "type": "string",
                    "description": "ID of the block to update",
                },
                "block_type": {
                    "type": "string",
                    "description": "The type of block (paragraph, heading_1, to_do, etc.)",
                    "enum": [t.value for t in BlockType],
                },
                "content": {
                    "type": "object",
                    "description": "The content for the block based on its type",
                },
                "archived": {
                    "type": "boolean",
                    "description": "Whether to archive (true) or restore (false) the block",
                },
            },
            "required": ["block_id", "block_type", "content"],
        },
    },
    {
        "name": "get-block",
        "description": "Retrieve a block by its ID",
        "inputSchema": {
            "type": "object",
            "properties": {
                "block_id": {
                    "type": "string",
                    "description": "ID of the block to retrieve",
                },
            },
            "required": ["block_id"],
        },
    },
]


async def _get_block_children(notion, args: Dict) -> Any:
    params = {
        "block_id": require_id(args, "block_id"),
        "page_size": page_size(args),
    }
    copy_nonempty(params, args, ("start_cursor",))
    return await notion.blocks.children.list(**params)


async def _append_block_children(notion, args: Dict) -> Any:
    params = {
        "block_id": require_id(args, "block_id"),
        "children": require(args, "children"),
    }
    after = optional_id(args, "after")
    if after is not None:
        params["after"] = after
    return await notion.blocks.children.append(**params)


async def _update_block(notion, args: Dict) -> Any:
    block_id = require_id(args, "block_id")
    update = BlockUpdate.from_args(args)
    return await notion.blocks.update(block_id=block_id, **update.to_params())


async def _get_block(notion, args: Dict) -> Any:
    return await notion.blocks.retrieve(block_id=require_id(args, "block_id"))


HANDLERS = {
    "get-block-children": _get_block_children,
    "append-block-children": _append_block_children,
    "update-block": _update_block,
    "get-block": _get_block,
}
