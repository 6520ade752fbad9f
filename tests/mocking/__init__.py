"""Test utilities shared across the dispatch test suite."""
from .sandbox import PNG_BYTES, FakeSandbox, SleepRecorder, SyncSandbox

__all__ = [
    "FakeSandbox",
    "PNG_BYTES",
    "SleepRecorder",
    "SyncSandbox",
]
