"""Caller-facing handle for the desktop tool server."""
from __future__ import annotations

import logging
import uuid
from contextlib import AsyncExitStack
from datetime import timedelta
from typing import Any, List, Mapping, Optional, Union

from mcp import ClientSession, types
from mcp.shared.exceptions import McpError

from errors import ClientClosedError, InternalError, NotConnectedError, from_mcp_error
from .output import ToolInvocationResult
from .server import CALL_ID_META_KEY, DesktopToolServer
from .spec import ToolSpec
from .transport import InMemoryTransport, Transport

logger = logging.getLogger(__name__)


class DesktopToolClient:
    """Lists and calls tools over a connected channel.

    ``connect`` returns only after both ends are attached and the protocol
    handshake has completed. ``connect`` and ``close`` must run in the same
    task.
    """

    def __init__(self, *, read_timeout: Optional[timedelta] = None) -> None:
        self._read_timeout = read_timeout
        self._session: Optional[ClientSession] = None
        self._stack: Optional[AsyncExitStack] = None
        self._closed = False

    @property
    def connected(self) -> bool:
        return self._session is not None

    @property
    def closed(self) -> bool:
        return self._closed

    async def connect(self, target: Union[DesktopToolServer, Transport]) -> None:
        if self._closed:
            raise ClientClosedError("client is closed")
        if self._session is not None:
            raise RuntimeError("client is already connected")

        transport = InMemoryTransport(target) if isinstance(target, DesktopToolServer) else target
        stack = AsyncExitStack()
        try:
            read_stream, write_stream = await transport.open(stack)
            session = await stack.enter_async_context(
                ClientSession(read_stream, write_stream, read_timeout_seconds=self._read_timeout)
            )
            await session.initialize()
        except BaseException:
            await stack.aclose()
            raise
        self._stack = stack
        self._session = session
        logger.debug("connected via %s", type(transport).__name__)

    async def list_tools(self) -> List[ToolSpec]:
        session = self._require_session()
        try:
            response = await session.list_tools()
        except McpError as exc:
            raise from_mcp_error(exc) from exc
        return [ToolSpec.from_mcp_tool(tool) for tool in response.tools]

    async def call_tool(
        self,
        name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        *,
        call_id: Optional[str] = None,
    ) -> ToolInvocationResult:
        """Invoke *name* and wait for exactly one result or error.

        The call id travels in the request's ``_meta`` so server-side logs and
        telemetry are keyed by the same id as the returned result.
        """
        session = self._require_session()
        call_id = call_id or uuid.uuid4().hex
        request = types.ClientRequest(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(
                    name=name,
                    arguments=dict(arguments or {}),
                    _meta={CALL_ID_META_KEY: call_id},
                ),
            )
        )
        try:
            result = await session.send_request(request, types.CallToolResult)
        except McpError as exc:
            raise from_mcp_error(exc) from exc
        if result.isError:
            message = "\n".join(getattr(block, "text", "") for block in result.content) or "tool call failed"
            raise InternalError(message)
        return ToolInvocationResult.from_content(call_id, result.content)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        stack, self._stack, self._session = self._stack, None, None
        if stack is not None:
            await stack.aclose()

    async def __aenter__(self) -> "DesktopToolClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _require_session(self) -> ClientSession:
        if self._closed:
            raise ClientClosedError("client is closed")
        if self._session is None:
            raise NotConnectedError("client is not connected")
        return self._session


__all__ = ["DesktopToolClient"]
