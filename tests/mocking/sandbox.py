"""Recording sandbox doubles for dispatch tests."""
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class FakeSandbox:
    """Async sandbox that records every capability call in order."""

    def __init__(
        self,
        *,
        screenshot: Any = PNG_BYTES,
        command_result: Any = None,
        fail_on: Iterable[str] = (),
    ) -> None:
        self._screenshot = screenshot
        self._command_result = command_result if command_result is not None else {"stdout": "", "stderr": ""}
        self._fail_on = set(fail_on)
        self.calls: List[Tuple[Any, ...]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self._fail_on:
            raise RuntimeError(f"{name} exploded")

    @property
    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    async def screenshot(self) -> Any:
        self._record("screenshot")
        return self._screenshot

    async def move_mouse(self, x, y) -> None:
        self._record("move_mouse", x, y)

    async def left_click(self) -> None:
        self._record("left_click")

    async def right_click(self) -> None:
        self._record("right_click")

    async def double_click(self) -> None:
        self._record("double_click")

    async def write(self, text: str) -> None:
        self._record("write", text)

    async def press(self, key: str) -> None:
        self._record("press", key)

    async def scroll(self, direction: str, amount) -> None:
        self._record("scroll", direction, amount)

    async def drag(self, start, end) -> None:
        self._record("drag", list(start), list(end))

    async def run_command(self, command: str) -> Any:
        self._record("run_command", command)
        return self._command_result


class SyncSandbox:
    """Sandbox whose methods are plain functions."""

    def __init__(self, *, stdout: str = "", stderr: str = "") -> None:
        self.calls: List[Tuple[Any, ...]] = []
        self._stdout = stdout
        self._stderr = stderr

    def screenshot(self) -> bytes:
        self.calls.append(("screenshot",))
        return PNG_BYTES

    def move_mouse(self, x, y) -> None:
        self.calls.append(("move_mouse", x, y))

    def left_click(self) -> None:
        self.calls.append(("left_click",))

    def right_click(self) -> None:
        self.calls.append(("right_click",))

    def double_click(self) -> None:
        self.calls.append(("double_click",))

    def write(self, text: str) -> None:
        self.calls.append(("write", text))

    def press(self, key: str) -> None:
        self.calls.append(("press", key))

    def scroll(self, direction: str, amount) -> None:
        self.calls.append(("scroll", direction, amount))

    def drag(self, start, end) -> None:
        self.calls.append(("drag", list(start), list(end)))

    def run_command(self, command: str):
        self.calls.append(("run_command", command))
        return type("Result", (), {"stdout": self._stdout, "stderr": self._stderr})()


class SleepRecorder:
    """Stand-in for ``asyncio.sleep`` that records requested durations."""

    def __init__(self) -> None:
        self.durations: List[float] = []

    async def __call__(self, seconds: float, result: Optional[Any] = None) -> Any:
        self.durations.append(seconds)
        return result


__all__ = ["FakeSandbox", "PNG_BYTES", "SleepRecorder", "SyncSandbox"]
