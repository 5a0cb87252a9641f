"""Shared fixtures for Notion MCP tests."""

import pytest

from notion_mcp.tools import ToolDispatcher


class _Endpoint:
    """Attribute access yields async methods that record on the fake client."""

    def __init__(self, client, prefix):
        self._client = client
        self._prefix = prefix

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        async def call(**kwargs):
            return await self._client._call(f"{self._prefix}.{name}", kwargs)

        return call


class FakeNotion:
    """
    Stands in for notion_client.AsyncClient.

    Every call is recorded as (method, kwargs). Responses and errors are
    keyed by dotted method name, e.g. "pages.retrieve".
    """

    def __init__(self, responses=None, errors=None):
        self.calls = []
        self.responses = dict(responses or {})
        self.errors = dict(errors or {})
        self.databases = _Endpoint(self, "databases")
        self.pages = _Endpoint(self, "pages")
        self.blocks = _Endpoint(self, "blocks")
        self.blocks.children = _Endpoint(self, "blocks.children")

    async def search(self, **kwargs):
        return await self._call("search", kwargs)

    async def _call(self, method, kwargs):
        self.calls.append((method, kwargs))
        if method in self.errors:
            raise self.errors[method]
        return self.responses.get(method, {"object": "list", "results": []})

    @property
    def last_call(self):
        return self.calls[-1]


@pytest.fixture
def notion():
    return FakeNotion()


@pytest.fixture
def dispatcher(notion):
    return ToolDispatcher(notion)


@pytest.fixture
def tmp_config_dir(tmp_path, monkeypatch):
    """Point the config directory at a temp directory for isolated tests."""
    config_dir = tmp_path / ".notion-mcp"
    config_dir.mkdir()
    monkeypatch.setenv("NOTION_MCP_DIR", str(config_dir))

    from notion_mcp import config
    monkeypatch.setattr(config.Config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config.Config, "CONFIG_ENV", config_dir / "config.env")

    yield config_dir
