import pytest

from errors import UnknownToolError, ValidationError
from tools.actions import BashCommand, Click, ClickButton, Drag, PressKey, Screenshot, Scroll, ScrollDirection, Wait
from tools.schemas import (
    BashCommandInput,
    ComputerUseInput,
    describe_tools,
    parse_tool_input,
    validate_tool_input,
)


def test_describe_tools_lists_exactly_two_tools_in_order():
    specs = describe_tools()
    assert [spec.name for spec in specs] == ["computer_use", "bash_command"]
    computer, bash = specs
    assert computer.input_schema["required"] == ["action"]
    assert set(computer.input_schema["properties"]["action"]["enum"]) == {
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
    }
    assert bash.input_schema["required"] == ["command"]
    assert set(bash.input_schema["properties"]) == {"command"}


def test_left_click_becomes_typed_click():
    action = validate_tool_input("computer_use", {"action": "left_click", "coordinate": [100, 200]})
    assert action == Click(button=ClickButton.LEFT, x=100, y=200)


@pytest.mark.parametrize("action", ["left_click", "double_click", "right_click", "mouse_move"])
def test_pointer_actions_require_coordinate(action):
    with pytest.raises(ValidationError) as exc:
        validate_tool_input("computer_use", {"action": action})
    assert f"coordinate required for {action}" in exc.value.message


@pytest.mark.parametrize("coordinate", [[1], [1, 2, 3], ["1", "2"], [True, 2], "1,2"])
def test_coordinate_must_be_two_numbers(coordinate):
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": "mouse_move", "coordinate": coordinate})


@pytest.mark.parametrize("action", ["type", "key"])
def test_text_actions_require_text(action):
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": action})
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": action, "text": ""})


def test_scroll_requires_direction_and_keeps_amount_optional():
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": "scroll"})
    action = validate_tool_input("computer_use", {"action": "scroll", "scroll_direction": "down"})
    assert action == Scroll(direction=ScrollDirection.DOWN, amount=None)
    assert action.effective_amount == 3


def test_scroll_rejects_unknown_direction():
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": "scroll", "scroll_direction": "left"})
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": "scroll", "scroll_direction": "up", "scroll_amount": "5"})


def test_zero_scroll_amount_means_default():
    action = validate_tool_input("computer_use", {"action": "scroll", "scroll_direction": "up", "scroll_amount": 0})
    assert action == Scroll(direction=ScrollDirection.UP, amount=0)
    assert action.effective_amount == 3


def test_drag_requires_both_coordinates():
    with pytest.raises(ValidationError) as exc:
        validate_tool_input("computer_use", {"action": "left_click_drag", "coordinate": [5, 6]})
    assert "start_coordinate and coordinate" in exc.value.message

    action = validate_tool_input(
        "computer_use",
        {"action": "left_click_drag", "start_coordinate": [1, 2], "coordinate": [3, 4]},
    )
    assert action == Drag(start=(1, 2), end=(3, 4))


def test_wait_duration_is_optional():
    assert validate_tool_input("computer_use", {"action": "wait"}) == Wait(requested=None)
    assert validate_tool_input("computer_use", {"action": "wait", "duration": 1.5}) == Wait(requested=1.5)


def test_key_keeps_original_text():
    action = validate_tool_input("computer_use", {"action": "key", "text": "Return"})
    assert action == PressKey(text="Return")


def test_unknown_action_rejected():
    with pytest.raises(ValidationError):
        validate_tool_input("computer_use", {"action": "teleport"})


def test_unknown_keys_are_dropped():
    assert validate_tool_input("computer_use", {"action": "screenshot", "zoom": 2}) == Screenshot()
    parsed = parse_tool_input("bash_command", {"command": "ls", "cwd": "/tmp"})
    assert parsed.dump() == {"command": "ls"}


def test_missing_arguments_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_tool_input("computer_use", None)
    assert "action" in exc.value.message


def test_bash_command_requires_a_string_command():
    assert BashCommandInput(command="echo hi").dump() == {"command": "echo hi"}
    with pytest.raises(ValidationError):
        validate_tool_input("bash_command", {})
    with pytest.raises(ValidationError):
        validate_tool_input("bash_command", {"command": 5})
    assert validate_tool_input("bash_command", {"command": ""}) == BashCommand(command="")


def test_unknown_tool_raises_unknown_tool_error():
    with pytest.raises(UnknownToolError):
        parse_tool_input("format_disk", {})


def test_parse_tool_input_returns_frozen_model():
    model = parse_tool_input("computer_use", {"action": "type", "text": "hello"})
    assert isinstance(model, ComputerUseInput)
    assert model.dump() == {"action": "type", "text": "hello"}
    with pytest.raises(Exception):
        model.text = "changed"
