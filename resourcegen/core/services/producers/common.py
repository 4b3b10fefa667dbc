"""Text helpers shared by the default producers."""

from __future__ import annotations

import json
from typing import Any

HEADER = "// Generated by resourcegen. Re-run with --force to regenerate.\n"


def ts_str(value: str) -> str:
    """Python str → single-quoted TypeScript string literal."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def ts_value(value: Any) -> str:
    """Plain data → TypeScript literal text (strings single-quoted)."""
    if isinstance(value, str):
        return ts_str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "undefined"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, list):
        return "[" + ", ".join(ts_value(v) for v in value) + "]"
    if isinstance(value, dict):
        inner = ", ".join(f"{k}: {ts_value(v)}" for k, v in value.items())
        return "{ " + inner + " }" if inner else "{}"
    return ts_str(str(value))


def jsx_text(value: str) -> str:
    """Escape text placed between JSX tags."""
    return (
        value.replace("{", "&#123;")
        .replace("}", "&#125;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )
