"""
MCP Server — Main Orchestrator

Ties together:
  Transport -> Protocol -> Router -> ToolDispatcher -> Notion

Flow:
  1. Transport reads one line from stdin
  2. Protocol validates JSON-RPC 2.0
  3. Each request runs in its own task, so a slow Notion call never
     blocks the read loop
  4. Router dispatches to the tool dispatcher
  5. Transport writes the response line to stdout
"""

import asyncio
import signal
import sys
from typing import Any, Dict, Optional, Set

from notion_mcp.config import Config
from notion_mcp.server.logger import get_logger
from notion_mcp.server.transport import PARSE_FAILED, StdioTransport
from notion_mcp.server.protocol import (
    validate_message,
    make_response,
    make_error,
    ProtocolError,
    PARSE_ERROR,
    INTERNAL_ERROR,
)
from notion_mcp.server.router import Router

log = get_logger("server")

READY_MESSAGE = "Notion MCP Server running on stdio"


class NotionMCPServer:
    """
    Main server orchestrator.

    Usage:
        server = NotionMCPServer()
        server.register_tools(ALL_TOOLS, ToolDispatcher(notion))
        await server.run()
    """

    def __init__(self, transport: Optional[StdioTransport] = None):
        self._transport = transport or StdioTransport()
        self._router = Router()
        self._tasks: Set[asyncio.Task] = set()
        self._running = False

    def register_tools(self, tools_list, handler):
        """Register the tool catalog and dispatcher with the router."""
        self._router.register_tools(tools_list, handler)

    # -- main loop --

    async def run(self):
        """Start the server and process messages until EOF or signal."""
        log.info(f"Starting {Config.SERVER_NAME} v{Config.SERVER_VERSION}")

        await self._transport.start()

        loop = asyncio.get_running_loop()
        main_task = asyncio.current_task()
        loop.set_exception_handler(_log_loop_exception)
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, main_task.cancel)
            except (NotImplementedError, RuntimeError):
                pass

        self._running = True
        log.info(f"Serving {self._router.tool_count} tools")
        sys.stderr.write(f"{READY_MESSAGE}\n")
        sys.stderr.flush()

        try:
            while self._running:
                parsed = await self._transport.read_message()
                if parsed is None:
                    log.info("EOF on stdin, shutting down")
                    break
                self._spawn(parsed)

        except asyncio.CancelledError:
            log.info("Server cancelled")
        finally:
            await self.shutdown()

    def _spawn(self, parsed: Any):
        task = asyncio.create_task(self.handle_message(parsed))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled() or task.exception() is None:
            return
        task.get_loop().call_exception_handler({
            "message": "Request task failed",
            "exception": task.exception(),
            "task": task,
        })

    async def handle_message(self, msg: Any):
        """Process a single JSON-RPC message and write its response, if any."""
        if msg is PARSE_FAILED:
            await self._transport.write_message(make_error(None, PARSE_ERROR, "Parse error"))
            return

        request_id = msg.get("id") if isinstance(msg, dict) else None

        try:
            msg_type = validate_message(msg)
        except ProtocolError as exc:
            log.warning(f"Invalid message: {exc.message}")
            await self._transport.write_message(make_error(request_id, exc.code, exc.message))
            return

        try:
            result = await self._router.route(msg)
            if msg_type == "notification" or result is None:
                return
            await self._transport.write_message(make_response(request_id, result))

        except ProtocolError as exc:
            log.warning(f"Protocol error: {exc.message} (code={exc.code})")
            if msg_type == "request":
                await self._transport.write_message(
                    make_error(request_id, exc.code, exc.message, exc.data)
                )

        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            if msg_type == "request":
                await self._transport.write_message(make_error(request_id, INTERNAL_ERROR, str(exc)))

    async def shutdown(self):
        """Graceful shutdown: let in-flight calls finish."""
        if not self._running:
            return
        self._running = False

        if self._tasks:
            log.info(f"Waiting for {len(self._tasks)} in-flight request(s)")
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

        await self._transport.close()

        log.info("Server stopped")


def _log_loop_exception(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]):
    """Log exceptions nobody awaited instead of letting them pass silently."""
    exc = context.get("exception")
    log.error(f"Unhandled exception in event loop: {context.get('message')}", exc_info=exc)
