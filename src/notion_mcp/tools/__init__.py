"""
Notion MCP Tools

Modules:
  database_tools  — list/query/create/update/get databases
  page_tools      — create/update/get pages
  block_tools     — list/append/update/get blocks
  search_tools    — workspace search

ALL_TOOLS is the advertised catalog, in a fixed order. ToolDispatcher maps
each catalog name to its handler and wraps every outcome in the tools/call
envelope.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from notion_mcp.server.logger import get_logger
from notion_mcp.server.protocol import tool_error, tool_success
from notion_mcp.tools import block_tools, database_tools, page_tools, search_tools

log = get_logger("tools")

Handler = Callable[[Any, Dict[str, Any]], Awaitable[Any]]

_MODULES = (database_tools, page_tools, block_tools, search_tools)

CATALOG_ORDER = (
    "list-databases",
    "query-database",
    "create-page",
    "update-page",
    "create-database",
    "update-database",
    "get-database",
    "get-page",
    "get-block-children",
    "append-block-children",
    "update-block",
    "get-block",
    "search",
)


def _collect_tools() -> List[Dict[str, Any]]:
    by_name = {}
    for mod in _MODULES:
        for tool_def in mod.TOOLS:
            if tool_def["name"] in by_name:
                raise RuntimeError(f"Duplicate tool definition: {tool_def['name']}")
            by_name[tool_def["name"]] = tool_def
    missing = [name for name in CATALOG_ORDER if name not in by_name]
    extra = sorted(set(by_name) - set(CATALOG_ORDER))
    if missing or extra:
        raise RuntimeError(f"Tool catalog mismatch: missing={missing} unordered={extra}")
    return [by_name[name] for name in CATALOG_ORDER]


ALL_TOOLS: List[Dict[str, Any]] = _collect_tools()


def build_registry(tools: Optional[List[Dict[str, Any]]] = None, modules=_MODULES) -> Dict[str, Handler]:
    """
    Build the name -> handler table.
    Raises RuntimeError unless every tool has exactly one handler and
    every handler has a tool.
    """
    tools = ALL_TOOLS if tools is None else tools
    registry: Dict[str, Handler] = {}
    for mod in modules:
        for name, handler in mod.HANDLERS.items():
            if name in registry:
                raise RuntimeError(f"Handler registered twice: {name}")
            registry[name] = handler

    tool_names = {t["name"] for t in tools}
    unhandled = sorted(tool_names - set(registry))
    orphaned = sorted(set(registry) - tool_names)
    if unhandled or orphaned:
        raise RuntimeError(f"Tool registry mismatch: unhandled={unhandled} orphaned={orphaned}")
    return registry


class ToolDispatcher:
    """
    Routes tools/call invocations to Notion handlers.

    Usage:
        dispatcher = ToolDispatcher(notion_client)
        envelope = await dispatcher("get-page", {"page_id": "..."})

    The Notion client is injected, so tests pass a fake with the same
    endpoint attributes (search, pages, databases, blocks).
    """

    def __init__(self, notion, registry: Optional[Dict[str, Handler]] = None):
        self._notion = notion
        self._registry = registry if registry is not None else build_registry()

    @property
    def tool_names(self) -> List[str]:
        return list(self._registry)

    async def __call__(self, name: str, args: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        handler = self._registry.get(name)
        if handler is None:
            log.warning(f"Unknown tool requested: {name}")
            return tool_error(f"Unknown tool: {name}")

        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"Tool {name} called with {args!r}")

        try:
            response = await handler(self._notion, args or {})
        except Exception as exc:
            log.error(f"Tool {name} failed: {exc}")
            return tool_error(f"Error executing {name}: {exc}")

        return tool_success(response)
