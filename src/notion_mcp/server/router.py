"""
Method Router — Dispatch MCP methods to handlers

Routes:
  initialize                 -> server capabilities handshake
  notifications/initialized  -> notification (no response)
  notifications/cancelled    -> ignored; in-flight calls run to completion
  ping                       -> pong
  tools/list                 -> tool catalog
  tools/call                 -> tool dispatcher
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional

from notion_mcp.config import Config
from notion_mcp.server.logger import get_logger
from notion_mcp.server.protocol import (
    initialize_result,
    tools_list_result,
    tool_error,
    ProtocolError,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
)

log = get_logger("router")

ToolHandler = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]


class Router:
    """MCP method dispatcher."""

    def __init__(self):
        self._tools: List[Dict[str, Any]] = []
        self._tool_handler: Optional[ToolHandler] = None
        self._initialized = False

    def register_tools(self, tools_list: List[Dict], handler: ToolHandler):
        """Register the tool catalog and the dispatcher that serves it."""
        self._tools = list(tools_list)
        self._tool_handler = handler
        log.info(f"Registered {len(tools_list)} tools: {[t['name'] for t in tools_list]}")

    async def route(self, msg: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Route a validated message to the appropriate handler.
        Returns the result payload or None for notifications.
        """
        method = msg.get("method", "")
        params = msg.get("params") or {}

        if method == "initialize":
            return self._handle_initialize(params)

        if method in ("initialized", "notifications/initialized"):
            self._initialized = True
            return None

        if method == "notifications/cancelled":
            return None

        if method == "ping":
            return {}

        if method == "tools/list":
            return tools_list_result(self._tools)

        if method == "tools/call":
            return await self._handle_tools_call(params)

        raise ProtocolError(METHOD_NOT_FOUND, f"Unknown method: {method}")

    def _handle_initialize(self, params: Dict) -> Dict[str, Any]:
        log.info(
            f"Client initialize: {params.get('clientInfo', {}).get('name', '?')} "
            f"protocol={params.get('protocolVersion', '?')}"
        )
        return initialize_result(
            server_name=Config.SERVER_NAME,
            server_version=Config.SERVER_VERSION,
            protocol_version=Config.PROTOCOL_VERSION,
        )

    async def _handle_tools_call(self, params: Dict) -> Dict[str, Any]:
        name = params.get("name", "")
        args = params.get("arguments") or {}

        if not name or not isinstance(name, str):
            raise ProtocolError(INVALID_PARAMS, "Missing tool name")
        if not isinstance(args, dict):
            raise ProtocolError(INVALID_PARAMS, "Tool arguments must be an object")
        if self._tool_handler is None:
            return tool_error(f"Unknown tool: {name}")

        try:
            return await self._tool_handler(name, args)
        except Exception as exc:
            log.error(f"Tool {name} error: {exc}", exc_info=True)
            return tool_error(f"Error executing {name}: {exc}")

    @property
    def tool_count(self) -> int:
        return len(self._tools)
