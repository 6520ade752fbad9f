"""Consumer-side state for tool invocations: lifecycle, screenshots, telemetry."""
from .lifecycle import (
    InvocationState,
    InvocationView,
    LifecycleTracker,
    ToolInvocationMessage,
    TrackedInvocation,
    describe_invocation,
)
from .screenshots import ScreenshotCorrelation, ScreenshotPair, capture_around
from .telemetry import DispatchTelemetry, ToolExecutionEvent

__all__ = [
    "DispatchTelemetry",
    "InvocationState",
    "InvocationView",
    "LifecycleTracker",
    "ScreenshotCorrelation",
    "ScreenshotPair",
    "ToolExecutionEvent",
    "ToolInvocationMessage",
    "TrackedInvocation",
    "capture_around",
    "describe_invocation",
]
