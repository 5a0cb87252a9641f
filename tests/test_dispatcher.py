"""Tests for the tool catalog and ToolDispatcher."""

import asyncio
import json

import pytest

from notion_mcp.tools import ALL_TOOLS, CATALOG_ORDER, ToolDispatcher, build_registry
from notion_mcp.tools import page_tools

EXPECTED_REQUIRED = {
    "list-databases": [],
    "query-database": ["database_id"],
    "create-page": ["parent_id", "properties"],
    "update-page": ["page_id", "properties"],
    "create-database": ["parent_id", "title", "properties"],
    "update-database": ["database_id"],
    "get-database": ["database_id"],
    "get-page": ["page_id"],
    "get-block-children": ["block_id"],
    "append-block-children": ["block_id", "children"],
    "update-block": ["block_id", "block_type", "content"],
    "get-block": ["block_id"],
    "search": [],
}

PRIMITIVES = {"string", "object", "array", "number", "boolean"}


class TestCatalog:
    def test_thirteen_tools_in_order(self):
        assert len(ALL_TOOLS) == 13
        assert [t["name"] for t in ALL_TOOLS] == list(CATALOG_ORDER)

    def test_required_fields(self):
        for tool_def in ALL_TOOLS:
            schema = tool_def["inputSchema"]
            assert schema["type"] == "object"
            assert schema.get("required", []) == EXPECTED_REQUIRED[tool_def["name"]]

    def test_property_types_are_primitives(self):
        for tool_def in ALL_TOOLS:
            for prop in tool_def["inputSchema"]["properties"].values():
                assert prop["type"] in PRIMITIVES
                assert prop["description"]

    def test_page_size_defaults(self):
        for name in ("query-database", "get-block-children", "search"):
            tool_def = next(t for t in ALL_TOOLS if t["name"] == name)
            assert tool_def["inputSchema"]["properties"]["page_size"]["default"] == 100


class TestRegistry:
    def test_every_tool_has_handler(self):
        registry = build_registry()
        assert sorted(registry) == sorted(CATALOG_ORDER)

    def test_missing_handler_rejected(self):
        extra_tool = {"name": "delete-everything", "inputSchema": {"type": "object", "properties": {}}}
        with pytest.raises(RuntimeError, match="unhandled=\\['delete-everything'\\]"):
            build_registry(ALL_TOOLS + [extra_tool])

    def test_duplicate_handler_rejected(self):
        with pytest.raises(RuntimeError, match="registered twice"):
            build_registry(modules=(page_tools, page_tools))


class TestDispatch:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, notion, dispatcher):
        result = await dispatcher("delete-everything", {})
        assert result == {
            "isError": True,
            "content": [{"type": "text", "text": "Unknown tool: delete-everything"}],
        }
        assert notion.calls == []

    @pytest.mark.asyncio
    async def test_backend_error_envelope(self, notion, dispatcher):
        notion.errors["pages.retrieve"] = Exception("permission denied")
        result = await dispatcher("get-page", {"page_id": "abc"})
        assert result == {
            "isError": True,
            "content": [{"type": "text", "text": "Error executing get-page: permission denied"}],
        }

    @pytest.mark.asyncio
    async def test_success_is_pretty_json(self, notion, dispatcher):
        page = {"object": "page", "id": "abc", "properties": {}}
        notion.responses["pages.retrieve"] = page
        result = await dispatcher("get-page", {"page_id": "abc"})
        assert result["isError"] is False
        assert len(result["content"]) == 1
        assert result["content"][0]["type"] == "text"
        assert result["content"][0]["text"] == json.dumps(page, indent=2)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [n for n, req in EXPECTED_REQUIRED.items() if req])
    async def test_missing_required_argument_is_error_envelope(self, notion, dispatcher, name):
        result = await dispatcher(name, {})
        assert result["isError"] is True
        assert result["content"][0]["text"].startswith(f"Error executing {name}: Missing required argument:")
        assert notion.calls == []

    @pytest.mark.asyncio
    async def test_none_arguments_treated_as_empty(self, notion, dispatcher):
        result = await dispatcher("search", None)
        assert result["isError"] is False
        assert notion.last_call == ("search", {"query": "", "page_size": 100})

    @pytest.mark.asyncio
    async def test_concurrent_invocations_are_independent(self):
        class SlowNotion:
            def __init__(self):
                self.pages = self
                self.blocks = self

            async def retrieve(self, **kwargs):
                if "page_id" in kwargs:
                    await asyncio.sleep(0.01)
                    raise Exception("permission denied")
                await asyncio.sleep(0.02)
                return {"object": "block", "id": kwargs["block_id"]}

        dispatcher = ToolDispatcher(SlowNotion())
        page_result, block_result = await asyncio.gather(
            dispatcher("get-page", {"page_id": "p-1"}),
            dispatcher("get-block", {"block_id": "b-1"}),
        )
        assert page_result["isError"] is True
        assert page_result["content"][0]["text"] == "Error executing get-page: permission denied"
        assert block_result["isError"] is False
        assert json.loads(block_result["content"][0]["text"]) == {"object": "block", "id": "b1"}
