"""Notion MCP Server — JSON-RPC over stdio."""

from notion_mcp.server.server import NotionMCPServer
from notion_mcp.server.router import Router
from notion_mcp.server.transport import StdioTransport

__all__ = ["NotionMCPServer", "Router", "StdioTransport"]
