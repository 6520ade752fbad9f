"""Handler mapping ``computer_use`` actions onto sandbox capability calls."""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Type

from ..actions import (
    Click,
    ClickButton,
    ComputerAction,
    Drag,
    MouseMove,
    PressKey,
    Screenshot,
    Scroll,
    TypeText,
    Wait,
    format_number,
)
from ..handler import ToolHandler, ToolInvocation
from ..output import ImagePayload, ResultPayload, TextPayload
from ..sandbox import SandboxCapability, call_capability

Sleep = Callable[[float], Awaitable[Any]]

_CLICK_METHODS = {
    ClickButton.LEFT: "left_click",
    ClickButton.RIGHT: "right_click",
    ClickButton.DOUBLE: "double_click",
}


class ComputerUseHandler(ToolHandler):
    """Executes one validated desktop action against the bound sandbox."""

    def __init__(self, *, sleep: Sleep = asyncio.sleep) -> None:
        self._sleep = sleep
        self._dispatch: Dict[Type[Any], Callable[[SandboxCapability, Any], Awaitable[ResultPayload]]] = {
            Screenshot: self._screenshot,
            Wait: self._wait,
            Click: self._click,
            MouseMove: self._mouse_move,
            TypeText: self._type,
            PressKey: self._key,
            Scroll: self._scroll,
            Drag: self._drag,
        }

    async def handle(self, invocation: ToolInvocation) -> ResultPayload:
        action: ComputerAction = invocation.action
        step = self._dispatch.get(type(action))
        if step is None:
            raise TypeError(f"unsupported computer action: {action!r}")
        return await step(invocation.sandbox, action)

    async def _screenshot(self, sandbox: SandboxCapability, action: Screenshot) -> ResultPayload:
        image = await call_capability(sandbox.screenshot)
        return ImagePayload.from_image(image)

    async def _wait(self, sandbox: SandboxCapability, action: Wait) -> ResultPayload:
        seconds = action.seconds
        await self._sleep(seconds)
        return TextPayload(f"Waited for {format_number(seconds)} seconds")

    async def _click(self, sandbox: SandboxCapability, action: Click) -> ResultPayload:
        await call_capability(sandbox.move_mouse, action.x, action.y)
        await call_capability(getattr(sandbox, _CLICK_METHODS[action.button]))
        return TextPayload(
            f"{action.button.label} clicked at {format_number(action.x)}, {format_number(action.y)}"
        )

    async def _mouse_move(self, sandbox: SandboxCapability, action: MouseMove) -> ResultPayload:
        await call_capability(sandbox.move_mouse, action.x, action.y)
        return TextPayload(f"Moved mouse to {format_number(action.x)}, {format_number(action.y)}")

    async def _type(self, sandbox: SandboxCapability, action: TypeText) -> ResultPayload:
        await call_capability(sandbox.write, action.text)
        return TextPayload(f"Typed: {action.text}")

    async def _key(self, sandbox: SandboxCapability, action: PressKey) -> ResultPayload:
        await call_capability(sandbox.press, action.sandbox_key)
        return TextPayload(f"Pressed key: {action.text}")

    async def _scroll(self, sandbox: SandboxCapability, action: Scroll) -> ResultPayload:
        amount = action.effective_amount
        await call_capability(sandbox.scroll, action.direction.value, amount)
        return TextPayload(f"Scrolled {action.direction.value} by {format_number(amount)} clicks")

    async def _drag(self, sandbox: SandboxCapability, action: Drag) -> ResultPayload:
        (sx, sy), (ex, ey) = action.start, action.end
        await call_capability(sandbox.drag, [sx, sy], [ex, ey])
        return TextPayload(
            f"Dragged from ({format_number(sx)}, {format_number(sy)}) "
            f"to ({format_number(ex)}, {format_number(ey)})"
        )


__all__ = ["ComputerUseHandler"]
