"""Notion MCP — Notion pages, databases, blocks and search over MCP stdio."""

__version__ = "1.0.0"
