"""Tool specification models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from mcp import types


@dataclass(slots=True)
class ToolSpec:
    """Describes a tool in the registry."""

    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory=dict)

    def to_mcp_tool(self) -> types.Tool:
        """Return the wire form used in tool listings."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )

    @classmethod
    def from_mcp_tool(cls, tool: types.Tool) -> "ToolSpec":
        return cls(
            name=tool.name,
            description=tool.description or "",
            input_schema=dict(tool.inputSchema or {}),
        )


__all__ = ["ToolSpec"]
