"""
Tests for routing log records to the host's print function.
"""

import logging
import re

import pytest

from lightcmd.diagnostics import (
    DiagnosticSinkHandler,
    attach_diagnostic_sink,
    detach_diagnostic_sink,
)
from lightcmd.execution.dispatcher import CommandDispatcher

LINE_PATTERN = re.compile(r"^CMD_LOG: \[\d{2}:\d{2}:\d{2}\] (\w+): (.*)$")


@pytest.fixture
def printed():
    """Collect lines written to a sink and remove the handler afterwards."""
    logger = logging.getLogger("lightcmd")
    previous_level = logger.level
    lines: list[str] = []
    handler = attach_diagnostic_sink(lines.append)
    yield lines
    detach_diagnostic_sink(handler)
    logger.setLevel(previous_level)


class TestAttachDiagnosticSink:
    """Tests for the installed handler."""

    def test_line_format(self, printed):
        """Test lines carry the prefix, time and level."""
        logging.getLogger("lightcmd.validation").warning("Check fixture %d", 7)
        assert len(printed) == 1
        match = LINE_PATTERN.match(printed[0])
        assert match is not None
        assert match.groups() == ("WARNING", "Check fixture 7")

    def test_level_filter(self, printed):
        """Test records below the sink level are not printed."""
        logging.getLogger("lightcmd").debug("noisy detail")
        assert printed == []

    def test_dispatcher_output(self, printed, host):
        """Test dispatcher records reach the sink."""
        CommandDispatcher(host).dispatch("Go Cue 1")
        assert any("Command executed: Go Cue 1" in line for line in printed)

    def test_detach(self):
        """Test a detached handler receives nothing."""
        lines: list[str] = []
        logger = logging.getLogger("lightcmd")
        previous_level = logger.level
        handler = attach_diagnostic_sink(lines.append, logging.DEBUG)
        detach_diagnostic_sink(handler)
        logger.setLevel(previous_level)
        logging.getLogger("lightcmd").error("after detach")
        assert lines == []
        assert handler not in logger.handlers


class TestDiagnosticSinkHandler:
    """Tests for the handler itself."""

    def test_failing_sink_does_not_raise(self, monkeypatch):
        """Test a sink that raises is reported through handleError."""
        errors = []

        def broken(line):
            raise OSError("monitor closed")

        handler = DiagnosticSinkHandler(broken)
        monkeypatch.setattr(handler, "handleError", errors.append)
        record = logging.LogRecord("lightcmd", logging.INFO, __file__, 1, "hello", None, None)
        handler.emit(record)
        assert errors == [record]
