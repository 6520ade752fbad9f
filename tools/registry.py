"""Tool handler registry for dispatch and discovery."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .handler import ToolHandler
from .handlers import BashCommandHandler, ComputerUseHandler
from .schemas import BASH_COMMAND, COMPUTER_USE, describe_tools
from .spec import ToolSpec

logger = logging.getLogger(__name__)


@dataclass
class RegisteredTool:
    """A tool specification coupled with its handler."""

    spec: ToolSpec
    handler: ToolHandler


class ToolRegistry:
    """Central registry mapping tool names to handlers, in listing order."""

    def __init__(self, tools: List[RegisteredTool]):
        self._tools: Dict[str, RegisteredTool] = {tool.spec.name: tool for tool in tools}

    def get_handler(self, name: str) -> Optional[ToolHandler]:
        tool = self._tools.get(name)
        return tool.handler if tool is not None else None

    def specs(self) -> List[ToolSpec]:
        return [tool.spec for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools


class ToolRegistryBuilder:
    """Builder object for constructing tool registries."""

    def __init__(self) -> None:
        self.tools: Dict[str, RegisteredTool] = {}

    def register(self, spec: ToolSpec, handler: ToolHandler) -> None:
        if spec.name in self.tools:
            logger.warning("overwriting handler for tool '%s'", spec.name)
        self.tools[spec.name] = RegisteredTool(spec=spec, handler=handler)

    def build(self) -> ToolRegistry:
        return ToolRegistry(list(self.tools.values()))


def build_default_registry(*, sleep: Optional[Callable[[float], Awaitable[Any]]] = None) -> ToolRegistry:
    """Registry exposing exactly ``computer_use`` and ``bash_command``."""
    computer = ComputerUseHandler(sleep=sleep) if sleep is not None else ComputerUseHandler()
    handlers: Dict[str, ToolHandler] = {
        COMPUTER_USE: computer,
        BASH_COMMAND: BashCommandHandler(),
    }
    builder = ToolRegistryBuilder()
    for spec in describe_tools():
        builder.register(spec, handlers[spec.name])
    return builder.build()


__all__ = [
    "RegisteredTool",
    "ToolRegistry",
    "ToolRegistryBuilder",
    "build_default_registry",
]
