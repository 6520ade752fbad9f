import asyncio

from session.screenshots import ScreenshotCorrelation, capture_around
from tests.mocking import PNG_BYTES
from tools.client import DesktopToolClient
from tools.output import ImagePayload


def test_correlation_records_by_call_id():
    screenshots = ScreenshotCorrelation()
    assert screenshots.pre("x") is None
    screenshots.record_pre("x", b"one")
    screenshots.record_post("x", ImagePayload.from_image(b"two"))
    assert "x" in screenshots
    assert screenshots.pre("x").raw_bytes == b"one"
    assert screenshots.post("x").raw_bytes == b"two"
    screenshots.discard("x")
    assert len(screenshots) == 0


def test_capture_around_brackets_actions(server, sandbox):
    screenshots = ScreenshotCorrelation()

    async def scenario():
        async with DesktopToolClient() as client:
            await client.connect(server)
            return await capture_around(
                client,
                screenshots,
                "computer_use",
                {"action": "left_click", "coordinate": [1, 2]},
                call_id="c1",
            )

    result = asyncio.run(scenario())
    assert result.call_id == "c1"
    assert sandbox.call_names == ["screenshot", "move_mouse", "left_click", "screenshot"]
    assert screenshots.pre("c1").raw_bytes == PNG_BYTES
    assert screenshots.post("c1").raw_bytes == PNG_BYTES


def test_capture_around_skips_screenshot_actions(server, sandbox):
    screenshots = ScreenshotCorrelation()

    async def scenario():
        async with DesktopToolClient() as client:
            await client.connect(server)
            return await capture_around(client, screenshots, "computer_use", {"action": "screenshot"}, call_id="s")

    result = asyncio.run(scenario())
    assert result.image is not None
    assert sandbox.call_names == ["screenshot"]
    assert "s" not in screenshots
