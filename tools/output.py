"""Structured tool results and their wire content form."""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Iterable, List, Optional, Union

from mcp import types

PNG_MIME_TYPE: Final[str] = "image/png"
NO_OUTPUT_TEXT: Final[str] = "(Command executed successfully with no output)"
ABORTED_TEXT: Final[str] = "User aborted"


class ResultKind(Enum):
    TEXT = "text"
    IMAGE = "image"


class Completion(Enum):
    """How an invocation reached its terminal state."""

    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class TextPayload:
    value: str

    @property
    def kind(self) -> ResultKind:
        return ResultKind.TEXT


@dataclass(frozen=True)
class ImagePayload:
    """Base64-encoded image data."""

    data: str
    mime_type: str = PNG_MIME_TYPE

    @property
    def kind(self) -> ResultKind:
        return ResultKind.IMAGE

    @property
    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    @classmethod
    def from_image(cls, image: Union[bytes, bytearray, memoryview, str]) -> "ImagePayload":
        """Build a payload from raw PNG bytes, or pass base64 text through."""
        if isinstance(image, str):
            try:
                base64.b64decode(image, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError("screenshot text is not valid base64") from exc
            return cls(data=image)
        return cls(data=base64.b64encode(bytes(image)).decode("ascii"))


ResultPayload = Union[TextPayload, ImagePayload]


@dataclass(frozen=True)
class ToolInvocationResult:
    """Terminal outcome of one tool invocation."""

    call_id: str
    payload: Optional[ResultPayload]
    completion: Completion = Completion.COMPLETED

    @classmethod
    def completed(cls, call_id: str, payload: ResultPayload) -> "ToolInvocationResult":
        return cls(call_id=call_id, payload=payload, completion=Completion.COMPLETED)

    @classmethod
    def aborted(cls, call_id: str) -> "ToolInvocationResult":
        return cls(call_id=call_id, payload=None, completion=Completion.ABORTED)

    @property
    def is_aborted(self) -> bool:
        return self.completion is Completion.ABORTED

    @property
    def text(self) -> Optional[str]:
        if isinstance(self.payload, TextPayload):
            return self.payload.value
        return None

    @property
    def image(self) -> Optional[ImagePayload]:
        if isinstance(self.payload, ImagePayload):
            return self.payload
        return None

    def to_content(self) -> List[Union[types.TextContent, types.ImageContent]]:
        """Return the wire content blocks for a completed result."""
        if self.is_aborted or self.payload is None:
            raise ValueError("aborted results have no wire content")
        if isinstance(self.payload, ImagePayload):
            return [types.ImageContent(type="image", data=self.payload.data, mimeType=self.payload.mime_type)]
        return [types.TextContent(type="text", text=self.payload.value)]

    @classmethod
    def from_content(cls, call_id: str, content: Iterable[Any]) -> "ToolInvocationResult":
        """Rebuild a result from wire content; the first text or image block wins."""
        for block in content:
            block_type = getattr(block, "type", None)
            if block_type == "image":
                return cls.completed(
                    call_id,
                    ImagePayload(data=block.data, mime_type=getattr(block, "mimeType", None) or PNG_MIME_TYPE),
                )
            if block_type == "text":
                return cls.completed(call_id, TextPayload(block.text))
        return cls.completed(call_id, TextPayload(""))


__all__ = [
    "ABORTED_TEXT",
    "Completion",
    "ImagePayload",
    "NO_OUTPUT_TEXT",
    "PNG_MIME_TYPE",
    "ResultKind",
    "ResultPayload",
    "TextPayload",
    "ToolInvocationResult",
]
