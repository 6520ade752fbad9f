"""Typed action variants produced by argument validation."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Number = Union[int, float]
Point = Tuple[Number, Number]

WAIT_DEFAULT_SECONDS = 1
WAIT_MAX_SECONDS = 2
SCROLL_DEFAULT_AMOUNT = 3

_KEY_ALIASES = {"Return": "enter"}


class Action(Enum):
    """Actions accepted by the ``computer_use`` tool."""

    SCREENSHOT = "screenshot"
    LEFT_CLICK = "left_click"
    DOUBLE_CLICK = "double_click"
    RIGHT_CLICK = "right_click"
    MOUSE_MOVE = "mouse_move"
    TYPE = "type"
    KEY = "key"
    SCROLL = "scroll"
    LEFT_CLICK_DRAG = "left_click_drag"
    WAIT = "wait"


class ClickButton(Enum):
    LEFT = "left"
    RIGHT = "right"
    DOUBLE = "double"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ScrollDirection(Enum):
    UP = "up"
    DOWN = "down"


def format_number(value: Number) -> str:
    """Render a number the way it reads in result text (``100`` not ``100.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clamp_wait(duration: Optional[Number]) -> Number:
    """Return the effective wait in seconds, always within [1, 2]."""
    if duration is None or math.isnan(duration) or duration <= 0:
        return WAIT_DEFAULT_SECONDS
    return min(max(duration, WAIT_DEFAULT_SECONDS), WAIT_MAX_SECONDS)


@dataclass(frozen=True)
class Screenshot:
    action = Action.SCREENSHOT


@dataclass(frozen=True)
class Wait:
    requested: Optional[Number] = None

    action = Action.WAIT

    @property
    def seconds(self) -> Number:
        return clamp_wait(self.requested)


@dataclass(frozen=True)
class Click:
    button: ClickButton
    x: Number
    y: Number

    @property
    def action(self) -> Action:
        return _CLICK_ACTIONS[self.button]


@dataclass(frozen=True)
class MouseMove:
    x: Number
    y: Number

    action = Action.MOUSE_MOVE


@dataclass(frozen=True)
class TypeText:
    text: str

    action = Action.TYPE


@dataclass(frozen=True)
class PressKey:
    text: str

    action = Action.KEY

    @property
    def sandbox_key(self) -> str:
        return _KEY_ALIASES.get(self.text, self.text)


@dataclass(frozen=True)
class Scroll:
    direction: ScrollDirection
    amount: Optional[Number] = None

    action = Action.SCROLL

    @property
    def effective_amount(self) -> Number:
        return self.amount or SCROLL_DEFAULT_AMOUNT


@dataclass(frozen=True)
class Drag:
    start: Point
    end: Point

    action = Action.LEFT_CLICK_DRAG


@dataclass(frozen=True)
class BashCommand:
    command: str


_CLICK_ACTIONS = {
    ClickButton.LEFT: Action.LEFT_CLICK,
    ClickButton.RIGHT: Action.RIGHT_CLICK,
    ClickButton.DOUBLE: Action.DOUBLE_CLICK,
}

CLICK_BUTTONS = {action: button for button, action in _CLICK_ACTIONS.items()}

ComputerAction = Union[Screenshot, Wait, Click, MouseMove, TypeText, PressKey, Scroll, Drag]


__all__ = [
    "Action",
    "BashCommand",
    "CLICK_BUTTONS",
    "Click",
    "ClickButton",
    "ComputerAction",
    "Drag",
    "MouseMove",
    "Number",
    "Point",
    "PressKey",
    "SCROLL_DEFAULT_AMOUNT",
    "Screenshot",
    "Scroll",
    "ScrollDirection",
    "TypeText",
    "WAIT_DEFAULT_SECONDS",
    "WAIT_MAX_SECONDS",
    "Wait",
    "clamp_wait",
    "format_number",
]
