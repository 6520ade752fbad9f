"""Core tool handler protocol and supporting data structures."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, TYPE_CHECKING

from errors import CapabilityError, DispatchError
from .output import ResultPayload, ToolInvocationResult
from .sandbox import SandboxCapability
from .tool_summary import summarize_tool_call

if TYPE_CHECKING:  # pragma: no cover
    from session.telemetry import DispatchTelemetry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolInvocation:
    """Context for a single validated tool invocation."""

    call_id: str
    tool_name: str
    action: Any
    sandbox: SandboxCapability
    arguments: Dict[str, Any] = field(default_factory=dict)


class ToolHandler(Protocol):
    """Protocol describing tool handler implementations."""

    async def handle(self, invocation: ToolInvocation) -> ResultPayload:
        ...


async def execute_handler(
    handler: ToolHandler,
    invocation: ToolInvocation,
    telemetry: Optional["DispatchTelemetry"] = None,
) -> ToolInvocationResult:
    """Run a handler, recording timing and wrapping sandbox failures."""
    start = time.monotonic()
    request_summary = summarize_tool_call(invocation.tool_name, invocation.arguments)
    logger.debug("dispatching %s [%s]", request_summary, invocation.call_id)
    payload: Optional[ResultPayload] = None
    error: Optional[DispatchError] = None
    try:
        payload = await handler.handle(invocation)
    except DispatchError as exc:
        error = exc
        raise
    except Exception as exc:
        logger.warning("%s failed [%s]: %s", request_summary, invocation.call_id, exc)
        error = CapabilityError(f"{invocation.tool_name} failed: {exc}")
        raise error from exc
    finally:
        duration = time.monotonic() - start
        if telemetry is not None:
            telemetry.record_tool_execution(
                tool_name=invocation.tool_name,
                call_id=invocation.call_id,
                duration=duration,
                success=payload is not None,
                error=error.message if error is not None else None,
                error_type=error.error_type.value if error is not None else None,
                request_summary=request_summary,
                response_kind=payload.kind.value if payload is not None else None,
            )

    logger.debug("%s -> %s [%dms]", request_summary, payload.kind.value, int(duration * 1000))
    return ToolInvocationResult.completed(invocation.call_id, payload)


__all__ = ["ToolHandler", "ToolInvocation", "execute_handler"]
