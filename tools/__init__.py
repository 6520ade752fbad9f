"""Desktop sandbox tools served over the Model Context Protocol."""

from .actions import Action, ClickButton, ScrollDirection, clamp_wait
from .client import DesktopToolClient
from .handler import ToolHandler, ToolInvocation, execute_handler
from .handlers import BashCommandHandler, ComputerUseHandler
from .output import (
    ABORTED_TEXT,
    Completion,
    ImagePayload,
    TextPayload,
    ToolInvocationResult,
)
from .registry import RegisteredTool, ToolRegistry, ToolRegistryBuilder, build_default_registry
from .sandbox import CommandResult, SandboxCapability
from .schemas import (
    BASH_COMMAND,
    COMPUTER_USE,
    BashCommandInput,
    ComputerUseInput,
    ToolSchema,
    describe_tools,
    parse_tool_input,
    validate_tool_input,
)
from .server import DesktopToolServer
from .spec import ToolSpec
from .transport import InMemoryTransport, StdioTransport, Transport
from errors import (
    CapabilityError,
    ClientClosedError,
    DispatchError,
    ErrorType,
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    NotConnectedError,
    NotInitializedError,
    UnknownToolError,
    ValidationError,
)

__all__ = [
    "ABORTED_TEXT",
    "Action",
    "BASH_COMMAND",
    "BashCommandHandler",
    "BashCommandInput",
    "COMPUTER_USE",
    "CapabilityError",
    "ClickButton",
    "ClientClosedError",
    "CommandResult",
    "Completion",
    "ComputerUseHandler",
    "ComputerUseInput",
    "DesktopToolClient",
    "DesktopToolServer",
    "DispatchError",
    "ErrorType",
    "ImagePayload",
    "InMemoryTransport",
    "InternalError",
    "InvalidParamsError",
    "MethodNotFoundError",
    "NotConnectedError",
    "NotInitializedError",
    "RegisteredTool",
    "SandboxCapability",
    "ScrollDirection",
    "StdioTransport",
    "TextPayload",
    "ToolHandler",
    "ToolInvocation",
    "ToolInvocationResult",
    "ToolRegistry",
    "ToolRegistryBuilder",
    "ToolSchema",
    "ToolSpec",
    "Transport",
    "UnknownToolError",
    "ValidationError",
    "build_default_registry",
    "clamp_wait",
    "describe_tools",
    "execute_handler",
    "parse_tool_input",
    "validate_tool_input",
]
