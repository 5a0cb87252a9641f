"""
Notion MCP CLI — Command-line interface for the Notion MCP server

Commands:
    notion-mcp server      Start the MCP server (stdio mode)
    notion-mcp tools       Print the tool catalog
    notion-mcp init        Create ~/.notion-mcp/ and a config template
    notion-mcp mcp-config  Print Claude Desktop/Code JSON config
"""

import asyncio
import json
import sys

import click

from notion_mcp import __version__
from notion_mcp.config import Config, ConfigError


@click.group()
@click.version_option(version=__version__, prog_name="notion-mcp")
def main():
    """Notion pages, databases, blocks and search for MCP clients."""
    pass


@main.command()
def server():
    """Start the Notion MCP server (stdio mode)."""
    from notion_client import AsyncClient

    from notion_mcp.server.logger import get_logger
    from notion_mcp.server.server import NotionMCPServer
    from notion_mcp.tools import ALL_TOOLS, ToolDispatcher

    log = get_logger("cli")

    async def _run(options):
        notion = AsyncClient(logger=get_logger("notion_client"), **options)
        try:
            srv = NotionMCPServer()
            srv.register_tools(ALL_TOOLS, ToolDispatcher(notion))
            await srv.run()
        finally:
            await notion.aclose()

    try:
        options = Config.client_options()
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    try:
        asyncio.run(_run(options))
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        log.error(f"Fatal error in server: {exc}", exc_info=True)
        sys.exit(1)


@main.command()
@click.option("--names", is_flag=True, help="Print only the tool names.")
def tools(names):
    """Print the advertised tool catalog as JSON."""
    from notion_mcp.tools import ALL_TOOLS

    if names:
        for tool_def in ALL_TOOLS:
            click.echo(tool_def["name"])
        return
    click.echo(json.dumps(ALL_TOOLS, indent=2, ensure_ascii=False))


@main.command()
def init():
    """Create ~/.notion-mcp/ and a config.env template."""
    Config.ensure_dirs()

    config_env = Config.CONFIG_ENV
    if not config_env.exists():
        config_env.write_text(
            "# Notion MCP Configuration\n"
            "# Environment variables take precedence over this file.\n"
            "\n"
            "# NOTION_API_KEY=secret_...\n"
            "# NOTION_VERSION=2022-06-28\n"
            "# NOTION_MCP_LOG_LEVEL=INFO\n"
            "# NOTION_MCP_LOG_FILE=~/.notion-mcp/notion-mcp.log\n"
        )

    click.echo(f"Notion MCP initialized at {Config.CONFIG_DIR}")
    click.echo(f"  Config: {config_env}")
    click.echo()
    click.echo("Next: set NOTION_API_KEY in the config file,")
    click.echo("then run `notion-mcp mcp-config` to get the JSON snippet.")


@main.command("mcp-config")
def mcp_config():
    """Print MCP config JSON for Claude Desktop or Claude Code."""
    command, args = _find_server_command()

    config = {
        "mcpServers": {
            "notion": {
                "command": command,
                "args": args,
                "env": {"NOTION_API_KEY": "<your integration token>"},
            }
        }
    }

    click.echo("Add this to your MCP client settings:\n")
    click.echo(json.dumps(config, indent=2))


def _find_server_command():
    """Find how to launch the server: the console script, else python -m."""
    import shutil
    path = shutil.which("notion-mcp")
    if path:
        return path, ["server"]
    return sys.executable, ["-m", "notion_mcp", "server"]


if __name__ == "__main__":
    main()
