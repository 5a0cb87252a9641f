"""
Search Tools — Notion workspace search

Tools:
  search  — Pages and databases matching a title query
"""

from typing import Any, Dict, List

from notion_mcp.tools.arguments import copy_nonempty, page_size

TOOLS: List[Dict[str, Any]] = [
    {
        "name": "search",
        "description": "Search Notion for pages or databases",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query string",
                    "default": "",
                },
                "filter": {
                    "type": "object",
                    "description": "Optional filter criteria",
                },
                "sort": {
                    "type": "object",
                    "description": "Optional sort criteria",
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
        },
    },
]


async def _search(notion, args: Dict) -> Any:
    params = {
        "query": args.get("query") or "",
        "page_size": page_size(args),
    }
    copy_nonempty(params, args, ("filter", "sort", "start_cursor"))
    return await notion.search(**params)


HANDLERS = {
    "search": _search,
}
