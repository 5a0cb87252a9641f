"""
Argument helpers shared by the Notion tool handlers.

Notion accepts IDs with or without hyphens; the handlers always send the
compact form so both spellings produce the same request.
"""

from typing import Any, Dict, Iterable, Optional

DEFAULT_PAGE_SIZE = 100


def normalize_id(value: str) -> str:
    """Strip hyphens from a Notion page or block ID."""
    return value.replace("-", "")


def require(args: Dict[str, Any], name: str) -> Any:
    value = args.get(name)
    if value is None:
        raise ValueError(f"Missing required argument: {name}")
    return value


def require_id(args: Dict[str, Any], name: str) -> str:
    value = require(args, name)
    if not isinstance(value, str):
        raise ValueError(f"Argument {name} must be a string")
    return normalize_id(value)


def optional_id(args: Dict[str, Any], name: str) -> Optional[str]:
    """Normalized ID for an optional argument, or None when it is absent or empty."""
    if not args.get(name):
        return None
    return require_id(args, name)


def page_size(args: Dict[str, Any]) -> int:
    # 0 and missing both fall back to the default
    return args.get("page_size") or DEFAULT_PAGE_SIZE


def copy_present(params: Dict[str, Any], args: Dict[str, Any], names: Iterable[str]) -> Dict[str, Any]:
    """Copy each named argument into params unless it is absent or None."""
    for name in names:
        if args.get(name) is not None:
            params[name] = args[name]
    return params


def copy_nonempty(params: Dict[str, Any], args: Dict[str, Any], names: Iterable[str]) -> Dict[str, Any]:
    """Like copy_present, but also drops empty strings, objects and arrays."""
    for name in names:
        if args.get(name):
            params[name] = args[name]
    return params
