"""Capability interface the dispatch server drives.

The concrete desktop (screen capture, input injection, process execution)
lives outside this package. Any object with these methods can be bound to
the server; methods may be plain functions or coroutines.
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Protocol, Sequence, Union, runtime_checkable

from .actions import Number


@dataclass(frozen=True)
class CommandResult:
    stdout: str = ""
    stderr: str = ""


MaybeAwaitable = Union[Any, Awaitable[Any]]


@runtime_checkable
class SandboxCapability(Protocol):
    """Operations the core expects from a desktop sandbox."""

    def screenshot(self) -> MaybeAwaitable:
        """Return PNG bytes (or base64 text) of the current screen."""
        ...

    def move_mouse(self, x: Number, y: Number) -> MaybeAwaitable:
        ...

    def left_click(self) -> MaybeAwaitable:
        ...

    def right_click(self) -> MaybeAwaitable:
        ...

    def double_click(self) -> MaybeAwaitable:
        ...

    def write(self, text: str) -> MaybeAwaitable:
        ...

    def press(self, key: str) -> MaybeAwaitable:
        ...

    def scroll(self, direction: str, amount: Number) -> MaybeAwaitable:
        ...

    def drag(self, start: Sequence[Number], end: Sequence[Number]) -> MaybeAwaitable:
        ...

    def run_command(self, command: str) -> MaybeAwaitable:
        """Return an object or mapping exposing ``stdout`` and ``stderr``."""
        ...


async def call_capability(fn: Any, *args: Any) -> Any:
    """Invoke a sandbox method, awaiting the result when it is awaitable."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def coerce_command_result(raw: Any) -> CommandResult:
    if isinstance(raw, CommandResult):
        return raw
    if isinstance(raw, dict):
        stdout, stderr = raw.get("stdout"), raw.get("stderr")
    else:
        stdout, stderr = getattr(raw, "stdout", None), getattr(raw, "stderr", None)
    return CommandResult(stdout=_as_text(stdout), stderr=_as_text(stderr))


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


__all__ = ["CommandResult", "SandboxCapability", "call_capability", "coerce_command_result"]
