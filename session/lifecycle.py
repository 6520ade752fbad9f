"""Per-call lifecycle tracking for streamed tool invocations.

Every invocation moves through ``streaming -> call -> result``. A tracker
records the state reported by each arriving message and only ever moves an
invocation forward; once ``result`` is reached the invocation is frozen and
later messages for it are ignored. An aborted invocation still ends in
``result``, carrying an aborted ``ToolInvocationResult`` rather than an error.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional

from tools.actions import format_number
from tools.output import ABORTED_TEXT, ImagePayload, TextPayload, ToolInvocationResult
from tools.schemas import BASH_COMMAND, COMPUTER_USE
from tools.tool_summary import prefix_text, summarize_tool_payload

from .screenshots import ScreenshotCorrelation

ARGS_PREVIEW_CHARS = 50
UNKNOWN_ACTION_PREVIEW_CHARS = 40
COMMAND_PREVIEW_CHARS = 60

_COMPUTER_TOOLS = {COMPUTER_USE, "computer"}
_BASH_TOOLS = {BASH_COMMAND, "bash"}


class InvocationState(Enum):
    STREAMING = "streaming"
    CALL = "call"
    RESULT = "result"

    @property
    def rank(self) -> int:
        return _STATE_RANK[self]

    @property
    def is_terminal(self) -> bool:
        return self is InvocationState.RESULT


_STATE_RANK = {
    InvocationState.STREAMING: 0,
    InvocationState.CALL: 1,
    InvocationState.RESULT: 2,
}


@dataclass(frozen=True)
class ToolInvocationMessage:
    """One state report for a tool invocation, as delivered over the channel."""

    call_id: str
    state: InvocationState
    tool_name: Optional[str] = None
    args: Mapping[str, Any] = field(default_factory=dict)
    args_text: str = ""
    result: Optional[ToolInvocationResult] = None

    def __post_init__(self) -> None:
        if self.state.is_terminal and self.result is None:
            raise ValueError("result messages must carry a result")
        if self.result is not None and self.result.call_id != self.call_id:
            raise ValueError("result belongs to a different call id")

    @classmethod
    def from_part(cls, part: Mapping[str, Any]) -> "ToolInvocationMessage":
        """Parse a wire part (``toolCallId``, ``state``, ``args``, ...)."""
        call_id = part.get("toolCallId")
        if not call_id:
            raise ValueError("tool invocation part is missing toolCallId")
        call_id = str(call_id)
        state = InvocationState(part.get("state"))
        args = part.get("args") or {}
        if not isinstance(args, Mapping):
            raise ValueError("args must be an object")

        result: Optional[ToolInvocationResult] = None
        if state.is_terminal:
            if part.get("aborted"):
                result = ToolInvocationResult.aborted(call_id)
            else:
                result = _result_from_wire(call_id, part.get("result"))
        return cls(
            call_id=call_id,
            state=state,
            tool_name=part.get("toolName") or None,
            args=dict(args),
            args_text=str(part.get("argsText") or ""),
            result=result,
        )


def _result_from_wire(call_id: str, value: Any) -> ToolInvocationResult:
    if isinstance(value, Mapping):
        if value.get("type") == "image" and value.get("data"):
            return ToolInvocationResult.completed(
                call_id, ImagePayload(data=str(value["data"]), mime_type=value.get("mimeType") or "image/png")
            )
        if value.get("type") == "text":
            return ToolInvocationResult.completed(call_id, TextPayload(str(value.get("text", ""))))
    if isinstance(value, str):
        return ToolInvocationResult.completed(call_id, TextPayload(value))
    if value is None:
        raise ValueError("result part is missing its result")
    return ToolInvocationResult.completed(call_id, TextPayload(json.dumps(value, ensure_ascii=False)))


@dataclass
class TrackedInvocation:
    """Tracker-owned record of one invocation."""

    call_id: str
    state: InvocationState
    tool_name: Optional[str]
    args: Dict[str, Any]
    args_text: str
    result: Optional[ToolInvocationResult]
    history: List[InvocationState]

    @property
    def aborted(self) -> bool:
        return self.result is not None and self.result.is_aborted

    @property
    def action(self) -> Optional[str]:
        value = self.args.get("action")
        return str(value) if value else None


@dataclass(frozen=True)
class InvocationView:
    """Renderer-facing snapshot of one invocation."""

    call_id: str
    tool_name: Optional[str]
    state: InvocationState
    action: Optional[str]
    label: str
    detail: str
    status: str
    aborted: bool
    result: Optional[ToolInvocationResult] = None
    pre_screenshot: Optional[ImagePayload] = None
    post_screenshot: Optional[ImagePayload] = None

    @property
    def completed(self) -> bool:
        return self.state.is_terminal and not self.aborted

    @property
    def image(self) -> Optional[ImagePayload]:
        return self.result.image if self.result is not None else None

    @property
    def result_text(self) -> Optional[str]:
        if self.aborted:
            return ABORTED_TEXT
        return self.result.text if self.result is not None else None


class LifecycleTracker:
    """Holds the current state of every observed correlation id."""

    def __init__(self, screenshots: Optional[ScreenshotCorrelation] = None) -> None:
        self._records: Dict[str, TrackedInvocation] = {}
        self.screenshots = screenshots if screenshots is not None else ScreenshotCorrelation()

    def observe(self, message: ToolInvocationMessage) -> bool:
        """Apply *message*; return whether tracker state changed."""
        record = self._records.get(message.call_id)
        if record is None:
            self._records[message.call_id] = TrackedInvocation(
                call_id=message.call_id,
                state=message.state,
                tool_name=message.tool_name,
                args=dict(message.args),
                args_text=message.args_text,
                result=message.result,
                history=[message.state],
            )
            return True

        if record.state.is_terminal or message.state.rank < record.state.rank:
            return False

        changed = self._merge_arguments(record, message)
        if message.state.rank > record.state.rank:
            record.state = message.state
            record.history.append(message.state)
            record.result = message.result
            changed = True
        return changed

    def observe_part(self, part: Mapping[str, Any]) -> bool:
        return self.observe(ToolInvocationMessage.from_part(part))

    def get(self, call_id: str) -> Optional[TrackedInvocation]:
        return self._records.get(call_id)

    def state_of(self, call_id: str) -> Optional[InvocationState]:
        record = self._records.get(call_id)
        return record.state if record is not None else None

    def history(self, call_id: str) -> List[InvocationState]:
        record = self._records.get(call_id)
        return list(record.history) if record is not None else []

    def view(self, call_id: str, *, in_flight: bool = True) -> InvocationView:
        record = self._records.get(call_id)
        if record is None:
            raise KeyError(call_id)
        return describe_invocation(record, in_flight=in_flight, screenshots=self.screenshots)

    def views(self, *, in_flight: bool = True) -> List[InvocationView]:
        return [self.view(call_id, in_flight=in_flight) for call_id in self._records]

    def __contains__(self, call_id: object) -> bool:
        return call_id in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @staticmethod
    def _merge_arguments(record: TrackedInvocation, message: ToolInvocationMessage) -> bool:
        changed = False
        if message.tool_name and message.tool_name != record.tool_name:
            record.tool_name = message.tool_name
            changed = True
        if message.args and dict(message.args) != record.args:
            record.args = dict(message.args)
            changed = True
        if message.args_text and message.args_text != record.args_text:
            record.args_text = message.args_text
            changed = True
        return changed


# Display strings


_ACTION_LABELS = {
    "screenshot": "Taking screenshot",
    "left_click": "Left clicking",
    "right_click": "Right clicking",
    "double_click": "Double clicking",
    "mouse_move": "Moving mouse",
    "type": "Typing",
    "key": "Pressing key",
    "wait": "Waiting",
    "scroll": "Scrolling",
    "left_click_drag": "Dragging",
}


def describe_invocation(
    record: TrackedInvocation,
    *,
    in_flight: bool = True,
    screenshots: Optional[ScreenshotCorrelation] = None,
) -> InvocationView:
    """Resolve label, detail and status strings for *record*.

    ``in_flight`` tells whether the surrounding response is still running; a
    ``call`` that is no longer in flight was stopped before its result came
    back and shows no status text.
    """
    streaming = record.state is InvocationState.STREAMING
    tool_name = record.tool_name
    action = record.action

    if tool_name in _COMPUTER_TOOLS or (streaming and not tool_name):
        label, detail = _computer_strings(record, streaming)
    elif tool_name in _BASH_TOOLS:
        label, detail = _bash_strings(record, streaming)
    else:
        label = f"{tool_name}: {record.state.value}"
        detail = summarize_tool_payload(record.args)

    pre = post = None
    if screenshots is not None and action != "screenshot":
        pre = screenshots.pre(record.call_id)
        post = screenshots.post(record.call_id)

    return InvocationView(
        call_id=record.call_id,
        tool_name=tool_name,
        state=record.state,
        action=action,
        label=label,
        detail=detail,
        status=_status_text(record, in_flight),
        aborted=record.aborted,
        result=record.result,
        pre_screenshot=pre,
        post_screenshot=post,
    )


def _status_text(record: TrackedInvocation, in_flight: bool) -> str:
    if record.state is InvocationState.STREAMING:
        return "Pending..."
    if record.state is InvocationState.CALL:
        return "Executing..." if in_flight else ""
    return "Aborted" if record.aborted else "Success"


def _computer_strings(record: TrackedInvocation, streaming: bool) -> tuple[str, str]:
    action = record.action
    if action is None:
        if not streaming:
            return "", ""
        if record.args_text:
            return "Generating", prefix_text(record.args_text, ARGS_PREVIEW_CHARS)
        return "Starting", ""

    label = _ACTION_LABELS.get(action)
    if label is None:
        detail = prefix_text(record.args_text, UNKNOWN_ACTION_PREVIEW_CHARS) if streaming else ""
        return action, detail
    if action == "screenshot":
        return label, ""

    detail = _action_detail(action, record.args)
    if not detail and streaming and record.args_text:
        detail = "(streaming...)"
    return label, detail


def _action_detail(action: str, args: Mapping[str, Any]) -> str:
    coordinate = _point(args.get("coordinate"))
    if action in ("left_click", "right_click", "double_click"):
        return f"at {coordinate}" if coordinate else ""
    if action == "mouse_move":
        return f"to {coordinate}" if coordinate else ""
    if action in ("type", "key"):
        text = args.get("text")
        return f'"{text}"' if text else ""
    if action == "wait":
        duration = args.get("duration")
        return f"{_fmt(duration)} seconds" if duration else ""
    if action == "scroll":
        direction, amount = args.get("scroll_direction"), args.get("scroll_amount")
        return f"{direction} by {_fmt(amount)}" if direction and amount else ""
    if action == "left_click_drag":
        start = _point(args.get("start_coordinate"))
        return f"from {start} to {coordinate}" if start and coordinate else ""
    return ""


def _bash_strings(record: TrackedInvocation, streaming: bool) -> tuple[str, str]:
    label = "Generating command" if streaming else "Running command"
    command = record.args.get("command")
    if streaming and record.args_text:
        detail = prefix_text(record.args_text, COMMAND_PREVIEW_CHARS)
    elif command:
        detail = prefix_text(command, COMMAND_PREVIEW_CHARS)
    else:
        detail = "..."
    return label, detail


def _point(value: Any) -> Optional[str]:
    # Streamed coordinates may still be incomplete.
    if isinstance(value, (list, tuple)) and len(value) >= 2:
        return f"({_fmt(value[0])}, {_fmt(value[1])})"
    return None


def _fmt(value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(value)
    return str(value)


__all__ = [
    "InvocationState",
    "InvocationView",
    "LifecycleTracker",
    "ToolInvocationMessage",
    "TrackedInvocation",
    "describe_invocation",
]
