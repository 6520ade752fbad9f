"""Pre/post-action screenshots keyed by tool invocation correlation id."""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union, TYPE_CHECKING

from tools.output import ImagePayload, ToolInvocationResult
from tools.schemas import COMPUTER_USE

if TYPE_CHECKING:  # pragma: no cover
    from tools.client import DesktopToolClient

ImageLike = Union[ImagePayload, bytes, bytearray, str]


@dataclass
class ScreenshotPair:
    pre: Optional[ImagePayload] = None
    post: Optional[ImagePayload] = None


class ScreenshotCorrelation:
    """Mapping from correlation id to the screenshots taken around that call."""

    def __init__(self) -> None:
        self._pairs: Dict[str, ScreenshotPair] = {}

    def record_pre(self, call_id: str, image: ImageLike) -> None:
        self._pairs.setdefault(call_id, ScreenshotPair()).pre = _as_payload(image)

    def record_post(self, call_id: str, image: ImageLike) -> None:
        self._pairs.setdefault(call_id, ScreenshotPair()).post = _as_payload(image)

    def pre(self, call_id: str) -> Optional[ImagePayload]:
        pair = self._pairs.get(call_id)
        return pair.pre if pair is not None else None

    def post(self, call_id: str) -> Optional[ImagePayload]:
        pair = self._pairs.get(call_id)
        return pair.post if pair is not None else None

    def discard(self, call_id: str) -> None:
        self._pairs.pop(call_id, None)

    def __contains__(self, call_id: object) -> bool:
        return call_id in self._pairs

    def __len__(self) -> int:
        return len(self._pairs)


def _as_payload(image: ImageLike) -> ImagePayload:
    if isinstance(image, ImagePayload):
        return image
    return ImagePayload.from_image(image)


async def capture_around(
    client: "DesktopToolClient",
    screenshots: ScreenshotCorrelation,
    name: str,
    arguments: Optional[Mapping[str, Any]] = None,
    *,
    call_id: Optional[str] = None,
) -> ToolInvocationResult:
    """Call *name*, recording screenshots before and after under its call id.

    Screenshot actions are called directly; their own result is the image.
    """
    call_id = call_id or uuid.uuid4().hex
    arguments = dict(arguments or {})
    bracket = not (name == COMPUTER_USE and arguments.get("action") == "screenshot")

    if bracket:
        before = await client.call_tool(COMPUTER_USE, {"action": "screenshot"})
        if before.image is not None:
            screenshots.record_pre(call_id, before.image)

    result = await client.call_tool(name, arguments, call_id=call_id)

    if bracket:
        after = await client.call_tool(COMPUTER_USE, {"action": "screenshot"})
        if after.image is not None:
            screenshots.record_post(call_id, after.image)
    return result


__all__ = ["ScreenshotCorrelation", "ScreenshotPair", "capture_around"]
