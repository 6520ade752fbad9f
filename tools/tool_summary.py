"""Helpers to summarize tool invocations for logs, telemetry and displays."""
from __future__ import annotations

from typing import Any, Mapping

_SUMMARY_KEYS: tuple[str, ...] = (
    "action",
    "command",
    "text",
)


def truncate_text(value: Any, *, limit: int = 60) -> str:
    text = str(value)
    if len(text) <= limit:
        return text
    if limit < 4:
        return text[:limit]
    return text[: limit - 3] + "..."


def prefix_text(value: Any, limit: int) -> str:
    """Return at most *limit* leading characters, with no ellipsis."""
    return str(value)[: max(limit, 0)]


def summarize_tool_payload(payload: Any, *, limit: int = 60) -> str:
    if isinstance(payload, Mapping):
        for key in _SUMMARY_KEYS:
            val = payload.get(key)
            if isinstance(val, (str, int, float)) and not isinstance(val, bool):
                return truncate_text(val, limit=limit)
        return ""
    if isinstance(payload, (str, int, float)):
        return truncate_text(payload, limit=limit)
    return ""


def summarize_tool_call(name: str, payload: Any, *, limit: int = 60) -> str:
    base = name or "tool"
    summary = summarize_tool_payload(payload, limit=limit)
    return f"{base}({summary})" if summary else base


__all__ = ["prefix_text", "summarize_tool_call", "summarize_tool_payload", "truncate_text"]
