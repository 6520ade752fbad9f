"""Ordered bidirectional channels between a dispatch client and server."""
from __future__ import annotations

from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Tuple, TYPE_CHECKING

import anyio
from mcp.client.stdio import StdioServerParameters, stdio_client
from mcp.shared.memory import create_client_server_memory_streams

if TYPE_CHECKING:  # pragma: no cover
    from .server import DesktopToolServer

StreamPair = Tuple[Any, Any]


class Transport(Protocol):
    """Opens the client end of a channel on *stack*.

    Everything the transport starts must be torn down when the stack closes.
    """

    async def open(self, stack: AsyncExitStack) -> StreamPair:
        ...


class InMemoryTransport:
    """Links a client to a server running in the same event loop."""

    def __init__(self, server: "DesktopToolServer") -> None:
        self._server = server

    async def open(self, stack: AsyncExitStack) -> StreamPair:
        client_streams, server_streams = await stack.enter_async_context(create_client_server_memory_streams())
        task_group = await stack.enter_async_context(anyio.create_task_group())
        stack.callback(task_group.cancel_scope.cancel)
        server_read, server_write = server_streams
        task_group.start_soon(self._server.run, server_read, server_write)
        return client_streams


@dataclass
class StdioTransport:
    """Spawns a server subprocess and talks to it over stdin/stdout."""

    command: str
    args: List[str] = field(default_factory=list)
    env: Optional[Dict[str, str]] = None
    cwd: Optional[Path] = None

    async def open(self, stack: AsyncExitStack) -> StreamPair:
        parameters = StdioServerParameters(
            command=self.command,
            args=list(self.args),
            env=dict(self.env) if self.env is not None else None,
            cwd=str(self.cwd) if self.cwd else None,
        )
        return await stack.enter_async_context(stdio_client(parameters))


__all__ = ["InMemoryTransport", "StdioTransport", "StreamPair", "Transport"]
