"""Handler running ``bash_command`` through the sandbox."""
from __future__ import annotations

from ..actions import BashCommand
from ..handler import ToolHandler, ToolInvocation
from ..output import NO_OUTPUT_TEXT, ResultPayload, TextPayload
from ..sandbox import call_capability, coerce_command_result


class BashCommandHandler(ToolHandler):
    """Returns stdout, falling back to stderr, then to a no-output marker."""

    async def handle(self, invocation: ToolInvocation) -> ResultPayload:
        action: BashCommand = invocation.action
        raw = await call_capability(invocation.sandbox.run_command, action.command)
        result = coerce_command_result(raw)
        return TextPayload(result.stdout or result.stderr or NO_OUTPUT_TEXT)


__all__ = ["BashCommandHandler"]
