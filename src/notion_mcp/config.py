"""
Notion MCP Configuration — Unified settings for the MCP server

Load order: env vars > ./.env > ~/.notion-mcp/config.env > defaults
"""

import os
from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """Configuration problem that prevents the server from starting."""


def _load_env_file(path: Path):
    """Load key=value pairs from an env file if it exists."""
    if not path.is_file():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        if "=" in line:
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def _config_dir() -> Path:
    return Path(os.environ.get("NOTION_MCP_DIR", str(Path.home() / ".notion-mcp")))


# Project .env wins over the per-user config.env
_load_env_file(Path.cwd() / ".env")
_load_env_file(_config_dir() / "config.env")


class Config:
    # Server identity
    SERVER_NAME = "notion-mcp"
    SERVER_VERSION = "1.0.0"
    PROTOCOL_VERSION = "2024-11-05"

    # Notion API
    NOTION_API_KEY: Optional[str] = os.environ.get("NOTION_API_KEY") or None
    NOTION_VERSION: Optional[str] = os.environ.get("NOTION_VERSION") or None
    NOTION_BASE_URL: Optional[str] = os.environ.get("NOTION_BASE_URL") or None

    # Paths
    CONFIG_DIR = _config_dir()
    CONFIG_ENV = CONFIG_DIR / "config.env"

    # Logging (NEVER to stdout — would corrupt MCP protocol)
    LOG_LEVEL = os.environ.get("NOTION_MCP_LOG_LEVEL", "INFO").upper()
    LOG_FILE: Optional[Path] = (
        Path(os.environ["NOTION_MCP_LOG_FILE"]).expanduser() if os.environ.get("NOTION_MCP_LOG_FILE") else None
    )

    @classmethod
    def ensure_dirs(cls):
        """Create the config directory and the log file's parent, if any."""
        cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        if cls.LOG_FILE is not None:
            cls.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def require_api_key(cls) -> str:
        if not cls.NOTION_API_KEY:
            raise ConfigError(
                "NOTION_API_KEY is not set. Export it or add it to "
                f"{cls.CONFIG_ENV} (run `notion-mcp init`)."
            )
        return cls.NOTION_API_KEY

    @classmethod
    def client_options(cls) -> dict:
        """Keyword options for notion_client.AsyncClient."""
        options = {"auth": cls.require_api_key()}
        if cls.NOTION_VERSION:
            options["notion_version"] = cls.NOTION_VERSION
        if cls.NOTION_BASE_URL:
            options["base_url"] = cls.NOTION_BASE_URL
        return options
