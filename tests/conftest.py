"""Shared pytest fixtures for the desktop tools test suite."""
from __future__ import annotations

import pytest

from session.telemetry import DispatchTelemetry
from tests.mocking import FakeSandbox, SleepRecorder
from tools.server import DesktopToolServer


@pytest.fixture
def sandbox() -> FakeSandbox:
    return FakeSandbox()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def telemetry() -> DispatchTelemetry:
    return DispatchTelemetry()


@pytest.fixture
def server(sandbox, sleeper, telemetry) -> DesktopToolServer:
    """Server bound to a recording sandbox with sleeps captured, not slept."""
    return DesktopToolServer(sandbox=sandbox, sleep=sleeper, telemetry=telemetry)


@pytest.fixture
def unbound_server(sleeper) -> DesktopToolServer:
    return DesktopToolServer(sleep=sleeper)
