"""Structured dispatch error types."""
from __future__ import annotations

from enum import Enum

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, ErrorData


class ErrorType(Enum):
    """Classification of dispatch errors."""

    VALIDATION = "validation"
    UNKNOWN_TOOL = "unknown_tool"
    NOT_INITIALIZED = "not_initialized"
    CAPABILITY = "capability"


_WIRE_CODES = {
    ErrorType.VALIDATION: INVALID_PARAMS,
    ErrorType.UNKNOWN_TOOL: METHOD_NOT_FOUND,
    ErrorType.NOT_INITIALIZED: INTERNAL_ERROR,
    ErrorType.CAPABILITY: INTERNAL_ERROR,
}


class DispatchError(Exception):
    """Base class for errors raised while dispatching a tool call."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.CAPABILITY) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type

    def __str__(self) -> str:  # pragma: no cover - convenience
        return self.message

    @property
    def code(self) -> int:
        return _WIRE_CODES[self.error_type]

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=self.code, message=self.message))


class ValidationError(DispatchError):
    """Arguments failed schema validation; the sandbox was never touched."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.VALIDATION)


class UnknownToolError(DispatchError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.UNKNOWN_TOOL)


class NotInitializedError(DispatchError):
    """Raised for any call received before a sandbox is bound."""

    def __init__(self, message: str = "Desktop sandbox not initialized") -> None:
        super().__init__(message, ErrorType.NOT_INITIALIZED)


class CapabilityError(DispatchError):
    """An underlying sandbox operation failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorType.CAPABILITY)


class SandboxBindingError(RuntimeError):
    """Rebinding the sandbox while calls are still outstanding."""


# Client-side view of the wire taxonomy.


class RemoteDispatchError(Exception):
    """Error returned by the dispatch server over the wire."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidParamsError(RemoteDispatchError):
    code = INVALID_PARAMS


class MethodNotFoundError(RemoteDispatchError):
    code = METHOD_NOT_FOUND


class InternalError(RemoteDispatchError):
    code = INTERNAL_ERROR


class NotConnectedError(RuntimeError):
    """The client was used before ``connect`` completed."""


class ClientClosedError(RuntimeError):
    """The client was used after ``close``."""


def from_mcp_error(exc: McpError) -> RemoteDispatchError:
    """Map a wire-level ``McpError`` onto the client error taxonomy."""
    error = exc.error
    if error.code == INVALID_PARAMS:
        return InvalidParamsError(error.message)
    if error.code == METHOD_NOT_FOUND:
        return MethodNotFoundError(error.message)
    return InternalError(error.message)


__all__ = [
    "CapabilityError",
    "ClientClosedError",
    "DispatchError",
    "ErrorType",
    "InternalError",
    "InvalidParamsError",
    "MethodNotFoundError",
    "NotConnectedError",
    "NotInitializedError",
    "RemoteDispatchError",
    "SandboxBindingError",
    "UnknownToolError",
    "ValidationError",
    "from_mcp_error",
]
