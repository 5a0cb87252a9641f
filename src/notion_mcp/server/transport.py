"""
STDIO Transport — newline-delimited JSON-RPC over stdin/stdout

Reads from stdin, writes to stdout.
NEVER pollutes stdout with logs.
Writes are serialized so concurrent responses never interleave.
"""

import sys
import json
import asyncio
from typing import Any, BinaryIO, Dict, Optional

from notion_mcp.server.logger import get_logger

log = get_logger("transport")

# Sentinel returned for a line that is not valid JSON
PARSE_FAILED = object()

# Longest accepted input line, in bytes
LINE_LIMIT = 2**20


class StdioTransport:
    """Line-oriented STDIO transport."""

    def __init__(self, reader: Optional[asyncio.StreamReader] = None, writer: Optional[BinaryIO] = None):
        self.running = False
        self._reader = reader
        self._stdout = writer
        self._write_lock = asyncio.Lock()

    async def start(self):
        """Initialize async stdin reader and direct stdout writer."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=LINE_LIMIT)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)

        if self._stdout is None:
            self._stdout = sys.stdout.buffer
        self.running = True
        log.info("Transport initialized")

    async def read_message(self) -> Any:
        """
        Read one JSON-RPC message from stdin.
        Returns the parsed message, PARSE_FAILED for an unparseable line,
        or None on EOF. Blank lines are skipped.
        """
        if not self._reader:
            raise RuntimeError("Transport not started")

        while True:
            try:
                raw_bytes = await self._readline()
            except asyncio.LimitOverrunError as exc:
                log.error("Message exceeds the line length limit; discarded")
                await self._discard_line(exc.consumed)
                return PARSE_FAILED
            if not raw_bytes:
                return None
            if raw_bytes.strip():
                break

        try:
            parsed = json.loads(raw_bytes)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log.error(f"JSON parse error: {exc}")
            return PARSE_FAILED

        log.debug(f"<- {raw_bytes[:500]!r}")
        return parsed

    async def _readline(self) -> bytes:
        try:
            return await self._reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as exc:
            return exc.partial

    async def _discard_line(self, consumed: int):
        """Drop an oversized line, up to and including its newline."""
        while True:
            await self._reader.readexactly(consumed)
            try:
                await self._reader.readuntil(b"\n")
                return
            except asyncio.LimitOverrunError as exc:
                consumed = exc.consumed
            except asyncio.IncompleteReadError:
                return

    async def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout as a single line."""
        if self._stdout is None:
            raise RuntimeError("Transport not started")

        raw_bytes = (json.dumps(message, separators=(",", ":")) + "\n").encode("utf-8")

        async with self._write_lock:
            self._stdout.write(raw_bytes)
            self._stdout.flush()
        log.debug(f"-> {raw_bytes[:500]!r}")

    async def close(self):
        self.running = False
        log.info("Transport closed")
