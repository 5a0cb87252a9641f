"""
stderr logger — NEVER writes to stdout (would corrupt MCP protocol)
"""

import logging
import sys

from notion_mcp.config import Config

_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Get a component logger that writes to stderr and the optional log file."""
    logger = logging.getLogger(f"notion_mcp.{name}")
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))
    formatter = logging.Formatter(_FORMAT, datefmt=_DATEFMT)

    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    if Config.LOG_FILE is not None:
        Config.ensure_dirs()
        fh = logging.FileHandler(Config.LOG_FILE, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    logger.propagate = False
    return logger
