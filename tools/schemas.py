"""Pydantic schemas for validated tool inputs."""
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Type, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, model_validator
from pydantic import ValidationError as PydanticValidationError

from errors import UnknownToolError, ValidationError
from .actions import (
    CLICK_BUTTONS,
    Action,
    BashCommand,
    Click,
    ComputerAction,
    Drag,
    MouseMove,
    PressKey,
    Screenshot,
    Scroll,
    ScrollDirection,
    TypeText,
    Wait,
)
from .spec import ToolSpec

StrictNumber = Union[StrictInt, StrictFloat]
Coordinate = Annotated[List[StrictNumber], Field(min_length=2, max_length=2)]

COMPUTER_USE = "computer_use"
BASH_COMMAND = "bash_command"

_COORDINATE_ACTIONS = {
    Action.LEFT_CLICK.value,
    Action.DOUBLE_CLICK.value,
    Action.RIGHT_CLICK.value,
    Action.MOUSE_MOVE.value,
}
_TEXT_ACTIONS = {Action.TYPE.value, Action.KEY.value}


class ToolSchema(BaseModel):
    """Base class for tool schemas: strict types, unknown keys dropped."""

    model_config = {
        "extra": "ignore",
        "frozen": True,
    }

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ComputerUseInput(ToolSchema):
    action: Literal[
        "screenshot",
        "left_click",
        "double_click",
        "right_click",
        "mouse_move",
        "type",
        "key",
        "scroll",
        "left_click_drag",
        "wait",
    ]
    coordinate: Optional[Coordinate] = Field(None, description="Target [x, y] position")
    text: Optional[str] = Field(None, description="Text to type or key to press")
    scroll_direction: Optional[Literal["up", "down"]] = None
    scroll_amount: Optional[StrictNumber] = Field(None, description="Scroll clicks (0 or missing means 3)")
    start_coordinate: Optional[Coordinate] = Field(None, description="Drag start [x, y] position")
    duration: Optional[StrictNumber] = Field(None, description="Seconds to wait (clamped to 1-2)")

    @model_validator(mode="after")
    def validate_action_fields(self) -> "ComputerUseInput":
        action = self.action
        if action in _COORDINATE_ACTIONS and self.coordinate is None:
            raise ValueError(f"coordinate required for {action}")
        if action in _TEXT_ACTIONS and not self.text:
            raise ValueError(f"text required for {action} action")
        if action == Action.SCROLL.value and self.scroll_direction is None:
            raise ValueError("scroll_direction required for scroll action")
        if action == Action.LEFT_CLICK_DRAG.value and (self.start_coordinate is None or self.coordinate is None):
            raise ValueError("start_coordinate and coordinate required for left_click_drag")
        return self

    def to_action(self) -> ComputerAction:
        action = Action(self.action)
        if action is Action.SCREENSHOT:
            return Screenshot()
        if action is Action.WAIT:
            return Wait(requested=self.duration)
        if action in CLICK_BUTTONS:
            x, y = self.coordinate
            return Click(button=CLICK_BUTTONS[action], x=x, y=y)
        if action is Action.MOUSE_MOVE:
            x, y = self.coordinate
            return MouseMove(x=x, y=y)
        if action is Action.TYPE:
            return TypeText(text=self.text)
        if action is Action.KEY:
            return PressKey(text=self.text)
        if action is Action.SCROLL:
            return Scroll(direction=ScrollDirection(self.scroll_direction), amount=self.scroll_amount)
        return Drag(start=tuple(self.start_coordinate), end=tuple(self.coordinate))


class BashCommandInput(ToolSchema):
    command: str = Field(..., description="Shell command to execute")

    def to_action(self) -> BashCommand:
        return BashCommand(command=self.command)


_TOOL_SCHEMAS: Dict[str, Type[ToolSchema]] = {
    COMPUTER_USE: ComputerUseInput,
    BASH_COMMAND: BashCommandInput,
}

_TOOL_DESCRIPTIONS: Dict[str, str] = {
    COMPUTER_USE: "Use the computer to perform actions like clicking, typing, taking screenshots, etc.",
    BASH_COMMAND: "Execute bash commands on the computer",
}


def describe_tools() -> list[ToolSpec]:
    """Return the tool contracts in registration order."""
    return [
        ToolSpec(
            name=name,
            description=_TOOL_DESCRIPTIONS[name],
            input_schema=schema.model_json_schema(),
        )
        for name, schema in _TOOL_SCHEMAS.items()
    ]


def parse_tool_input(tool_name: str, raw_input: Optional[Mapping[str, Any]]) -> ToolSchema:
    """Parse and validate raw input into the tool's schema model."""
    schema = _TOOL_SCHEMAS.get(tool_name)
    if schema is None:
        raise UnknownToolError(f"Unknown tool: {tool_name}")
    if raw_input is None:
        raw_input = {}
    if not isinstance(raw_input, Mapping):
        raise ValidationError(f"Invalid {tool_name} arguments: expected an object")
    try:
        return schema.model_validate(dict(raw_input))
    except PydanticValidationError as exc:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ())) or "input"
            messages.append(f"{loc}: {err.get('msg', 'invalid value')}")
        raise ValidationError(f"Invalid {tool_name} arguments: " + "; ".join(messages)) from None


def validate_tool_input(tool_name: str, raw_input: Optional[Mapping[str, Any]]) -> Union[ComputerAction, BashCommand]:
    """Validate *raw_input* and return the typed action it describes."""
    return parse_tool_input(tool_name, raw_input).to_action()


__all__ = [
    "BASH_COMMAND",
    "BashCommandInput",
    "COMPUTER_USE",
    "ComputerUseInput",
    "ToolSchema",
    "describe_tools",
    "parse_tool_input",
    "validate_tool_input",
]
