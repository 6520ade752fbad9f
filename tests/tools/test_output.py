import base64

import pytest
from mcp import types

from tools.output import (
    ABORTED_TEXT,
    Completion,
    ImagePayload,
    ResultKind,
    TextPayload,
    ToolInvocationResult,
)


def test_text_result_to_content():
    result = ToolInvocationResult.completed("c1", TextPayload("Typed: hi"))
    (block,) = result.to_content()
    assert isinstance(block, types.TextContent)
    assert block.text == "Typed: hi"
    assert result.payload.kind is ResultKind.TEXT


def test_image_result_to_content():
    payload = ImagePayload.from_image(b"png-bytes")
    result = ToolInvocationResult.completed("c1", payload)
    (block,) = result.to_content()
    assert isinstance(block, types.ImageContent)
    assert block.mimeType == "image/png"
    assert base64.b64decode(block.data) == b"png-bytes"


def test_from_content_prefers_first_supported_block():
    content = [
        types.ImageContent(type="image", data="aGk=", mimeType="image/png"),
        types.TextContent(type="text", text="ignored"),
    ]
    result = ToolInvocationResult.from_content("c2", content)
    assert result.image == ImagePayload(data="aGk=")
    assert result.text is None


def test_from_content_empty_is_empty_text():
    assert ToolInvocationResult.from_content("c3", []).text == ""


def test_aborted_is_a_value_distinct_from_sentinel_text():
    aborted = ToolInvocationResult.aborted("c4")
    lookalike = ToolInvocationResult.completed("c4", TextPayload(ABORTED_TEXT))
    assert aborted.is_aborted
    assert aborted.completion is Completion.ABORTED
    assert not lookalike.is_aborted
    assert aborted != lookalike
    with pytest.raises(ValueError):
        aborted.to_content()


def test_image_from_invalid_base64_text_rejected():
    with pytest.raises(ValueError):
        ImagePayload.from_image("not base64!!")
