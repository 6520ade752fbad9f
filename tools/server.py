"""MCP server exposing the desktop sandbox as ``computer_use`` and ``bash_command``."""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from errors import DispatchError, NotInitializedError, SandboxBindingError, UnknownToolError
from session.telemetry import DispatchTelemetry
from .handler import ToolInvocation, execute_handler
from .output import ToolInvocationResult
from .registry import ToolRegistry, build_default_registry
from .sandbox import SandboxCapability
from .schemas import validate_tool_input

logger = logging.getLogger(__name__)

DEFAULT_SERVER_NAME = "desktop-tools-server"
DEFAULT_SERVER_VERSION = "1.0.0"

# Request ``_meta`` key carrying the caller's correlation id.
CALL_ID_META_KEY = "callId"


class DesktopToolServer:
    """Validates tool calls and dispatches them to the bound sandbox.

    The server can be constructed, listed and connected before a sandbox is
    bound; every ``call_tool`` in that window fails with an internal error.
    """

    def __init__(
        self,
        *,
        name: str = DEFAULT_SERVER_NAME,
        version: str = DEFAULT_SERVER_VERSION,
        sandbox: Optional[SandboxCapability] = None,
        registry: Optional[ToolRegistry] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        telemetry: Optional[DispatchTelemetry] = None,
    ) -> None:
        self._registry = registry or build_default_registry(sleep=sleep)
        self._sandbox = sandbox
        self._in_flight = 0
        self.telemetry = telemetry if telemetry is not None else DispatchTelemetry()
        self._server: Server = Server(name, version=version)
        self._server.request_handlers[types.ListToolsRequest] = self._handle_list_tools
        self._server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    @property
    def name(self) -> str:
        return self._server.name

    @property
    def sandbox(self) -> Optional[SandboxCapability]:
        return self._sandbox

    @property
    def in_flight(self) -> int:
        return self._in_flight

    def bind_sandbox(self, sandbox: SandboxCapability) -> None:
        """Attach the sandbox all subsequent calls are dispatched to."""
        if self._sandbox is not None and sandbox is not self._sandbox and self._in_flight:
            raise SandboxBindingError(
                f"cannot rebind sandbox while {self._in_flight} call(s) are outstanding"
            )
        self._sandbox = sandbox
        logger.debug("sandbox bound: %s", type(sandbox).__name__)

    def list_tools(self) -> List[types.Tool]:
        return [spec.to_mcp_tool() for spec in self._registry.specs()]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]],
        *,
        call_id: Optional[str] = None,
    ) -> ToolInvocationResult:
        """Validate and execute one tool call.

        Raises ``NotInitializedError`` when no sandbox is bound,
        ``UnknownToolError`` for names outside the registry and
        ``ValidationError`` for bad arguments, all before the sandbox is
        touched. Sandbox failures surface as ``CapabilityError``.
        """
        call_id = call_id or uuid.uuid4().hex
        sandbox = self._sandbox
        if sandbox is None:
            self.telemetry.record_rejection()
            raise NotInitializedError()

        handler = self._registry.get_handler(name)
        if handler is None:
            self.telemetry.record_rejection()
            raise UnknownToolError(f"Unknown tool: {name}")

        try:
            action = validate_tool_input(name, arguments)
        except DispatchError:
            self.telemetry.record_rejection()
            raise

        invocation = ToolInvocation(
            call_id=call_id,
            tool_name=name,
            action=action,
            sandbox=sandbox,
            arguments=dict(arguments or {}),
        )
        self._in_flight += 1
        try:
            return await execute_handler(handler, invocation, self.telemetry)
        finally:
            self._in_flight -= 1

    async def run(self, read_stream: Any, write_stream: Any, *, raise_exceptions: bool = False) -> None:
        """Serve the protocol over an ordered pair of message streams."""
        await self._server.run(
            read_stream,
            write_stream,
            self._server.create_initialization_options(),
            raise_exceptions=raise_exceptions,
        )

    async def serve_stdio(self) -> None:
        async with stdio_server() as (read_stream, write_stream):
            await self.run(read_stream, write_stream)

    async def _handle_list_tools(self, request: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=self.list_tools()))

    async def _handle_call_tool(self, request: types.CallToolRequest) -> types.ServerResult:
        params = request.params
        call_id = self._request_call_id(params)
        try:
            result = await self.call_tool(params.name, params.arguments, call_id=call_id)
        except DispatchError as exc:
            logger.debug("call %s rejected (%s): %s", call_id, exc.error_type.value, exc.message)
            raise exc.to_mcp_error() from exc
        return types.ServerResult(types.CallToolResult(content=result.to_content(), isError=False))

    def _request_call_id(self, params: types.CallToolRequestParams) -> str:
        meta = params.meta
        if isinstance(meta, Mapping):
            value = meta.get(CALL_ID_META_KEY)
        else:
            value = getattr(meta, CALL_ID_META_KEY, None)
        if value:
            return str(value)
        try:
            return str(self._server.request_context.request_id)
        except LookupError:
            return uuid.uuid4().hex


__all__ = ["CALL_ID_META_KEY", "DEFAULT_SERVER_NAME", "DEFAULT_SERVER_VERSION", "DesktopToolServer"]
