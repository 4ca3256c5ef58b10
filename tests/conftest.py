"""
Shared test fixtures and utilities for the lightcmd test suite.
"""

import logging

import pytest


class RecordingHost:
    """HostRuntime double that records every primitive call.

    Commands registered with `fail` raise on their next calls, once per
    queued message, before the host starts accepting them again.
    """

    def __init__(self):
        self.calls: list[tuple[str, str, object, object]] = []
        self.results: dict[str, str] = {}
        self._failures: dict[str, list[str]] = {}

    def fail(self, command: str, times: int = 1, message: str = "Host rejected command"):
        self._failures[command] = [f"{message} ({i + 1})" for i in range(times)]

    @property
    def commands(self) -> list[str]:
        return [call[1] for call in self.calls]

    def _record(self, primitive, command, undo_handle, target_handle):
        self.calls.append((primitive, command, undo_handle, target_handle))
        pending = self._failures.get(command)
        if pending:
            raise RuntimeError(pending.pop(0))

    def execute_sync(self, command, undo_handle=None):
        self._record("sync", command, undo_handle, None)
        return self.results.get(command, "OK")

    def execute_async(self, command, undo_handle=None, target_handle=None):
        self._record("async", command, undo_handle, target_handle)

    def execute_async_and_wait(self, command, undo_handle=None, target_handle=None):
        self._record("async_and_wait", command, undo_handle, target_handle)


class StepClock:
    """Monotonic clock double advancing by a fixed step on every reading."""

    def __init__(self, step: float):
        self.step = step
        self.now = 0.0

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def host():
    """Recording host accepting every command with result "OK".

    Usage:
        def test_something(host):
            host.fail("Go Cue 5", times=2)
            ...
            assert host.commands == ["Go Cue 5", "Go Cue 5"]
    """
    return RecordingHost()


@pytest.fixture
def slow_clock():
    """Clock whose readings are five seconds apart."""
    return StepClock(step=5.0)


@pytest.fixture
def lightcmd_logs(caplog):
    """Capture every record of the package logger, DEBUG and up."""
    caplog.set_level(logging.DEBUG, logger="lightcmd")
    return caplog
