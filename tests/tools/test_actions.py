import math

import pytest

from tools.actions import (
    Action,
    Click,
    ClickButton,
    PressKey,
    Wait,
    clamp_wait,
    format_number,
)


@pytest.mark.parametrize(
    "requested, expected",
    [
        (None, 1),
        (0, 1),
        (-3, 1),
        (0.5, 1),
        (1, 1),
        (1.5, 1.5),
        (2, 2),
        (10, 2),
        (math.inf, 2),
        (math.nan, 1),
    ],
)
def test_clamp_wait_stays_within_bounds(requested, expected):
    effective = clamp_wait(requested)
    assert effective == expected
    assert 1 <= effective <= 2


def test_wait_seconds_uses_clamp():
    assert Wait(requested=10).seconds == 2
    assert Wait().seconds == 1


def test_press_key_aliases_return_only():
    assert PressKey(text="Return").sandbox_key == "enter"
    assert PressKey(text="ctrl+c").sandbox_key == "ctrl+c"
    assert PressKey(text="return").sandbox_key == "return"


def test_click_reports_its_action():
    assert Click(button=ClickButton.DOUBLE, x=1, y=2).action is Action.DOUBLE_CLICK
    assert ClickButton.RIGHT.label == "Right"


@pytest.mark.parametrize("value, text", [(100, "100"), (100.0, "100"), (12.5, "12.5"), (-4, "-4")])
def test_format_number(value, text):
    assert format_number(value) == text
