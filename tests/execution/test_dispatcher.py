"""
Tests for command dispatch.

Covers validation before execution, the confirmation gate, host primitive
selection, retries, best-effort timeouts, batches and the spec and template
entry points.
"""

import logging

import pytest

from lightcmd.building.specs import PropertySpec
from lightcmd.config import DispatcherConfig
from lightcmd.core.enums import ExecutionMode, SeverityLevel
from lightcmd.core.result import ErrorCategory, ErrorCode
from lightcmd.exceptions import CommandSyntaxError, ExecutionError, TemplateNotFoundError
from lightcmd.execution.dispatcher import CommandDispatcher
from lightcmd.execution.host import CallableHost, HostRuntime
from lightcmd.execution.outcomes import OutcomeStatus
from lightcmd.templates.engine import CommandTemplate, ParamType


class TestDispatch:
    """Tests for dispatching one command."""

    def test_success(self, host):
        """Test a valid command runs once and returns the host result."""
        host.results["Fixture 1 At 50"] = "Fixture 1 set"
        outcome = CommandDispatcher(host).dispatch("Fixture 1 At 50")
        assert outcome.status is OutcomeStatus.SUCCEEDED
        assert outcome.success
        assert outcome.result == "Fixture 1 set"
        assert host.commands == ["Fixture 1 At 50"]
        assert len(outcome.attempts) == 1
        assert outcome.attempts[0].success

    def test_command_is_trimmed(self, host):
        """Test surrounding whitespace never reaches the host."""
        CommandDispatcher(host).dispatch("  Go Cue 1 ")
        assert host.commands == ["Go Cue 1"]

    def test_syntax_error_rejected(self, host):
        """Test malformed commands never reach the host."""
        outcome = CommandDispatcher(host).dispatch('Fixture 1 At "50')
        assert outcome.status is OutcomeStatus.REJECTED
        assert outcome.error.code is ErrorCode.UNBALANCED_QUOTES
        assert outcome.error.category is ErrorCategory.SYNTAX
        assert outcome.attempts == ()
        assert host.calls == []

    def test_empty_rejected(self, host):
        """Test empty commands are rejected."""
        outcome = CommandDispatcher(host).dispatch(None)
        assert outcome.error.code is ErrorCode.EMPTY
        assert host.calls == []

    def test_warnings_carried(self, host):
        """Test syntax warnings travel with a successful outcome."""
        outcome = CommandDispatcher(host).dispatch("fixture 1 At 50")
        assert outcome.success
        assert outcome.warnings == ("Keyword 'fixture' is lowercase, consider 'Fixture'",)

    def test_parameter_check(self, host):
        """Test parameter checks reject values when enabled."""
        config = DispatcherConfig(check_parameters=True)
        outcome = CommandDispatcher(host, config).dispatch("Fixture 1 At 150")
        assert outcome.status is OutcomeStatus.REJECTED
        assert outcome.error.code is ErrorCode.OUT_OF_RANGE
        assert host.calls == []

    def test_parameter_check_off_by_default(self, host):
        """Test out-of-range values reach the host unless checking is enabled."""
        assert CommandDispatcher(host).dispatch("Fixture 1 At 150").success

    def test_undo_handle_passed(self, host):
        """Test the undo handle reaches the sync primitive."""
        undo = object()
        CommandDispatcher(host).dispatch("Go Cue 1", undo_handle=undo)
        assert host.calls == [("sync", "Go Cue 1", undo, None)]


class TestConfirmation:
    """Tests for the destructive-command gate."""

    def test_destructive_awaits_confirmation(self, host):
        """Test destructive commands are held until confirmed."""
        outcome = CommandDispatcher(host).dispatch("Clear All")
        assert outcome.status is OutcomeStatus.AWAITING_CONFIRMATION
        assert outcome.error.code is ErrorCode.CONFIRMATION_REQUIRED
        assert "Will clear ALL current data and selections" in outcome.error.message
        assert outcome.safety.severity is SeverityLevel.CRITICAL
        assert host.calls == []

    def test_confirmed_runs(self, host):
        """Test a confirmed destructive command executes with a warning."""
        outcome = CommandDispatcher(host).dispatch("Clear All", confirmed=True)
        assert outcome.success
        assert host.commands == ["Clear All"]
        assert outcome.warnings == ("CRITICAL: Will clear ALL current data and selections",)

    def test_threshold(self, host):
        """Test severities below the threshold run without confirmation."""
        config = DispatcherConfig(confirmation_threshold=SeverityLevel.HIGH)
        dispatcher = CommandDispatcher(host, config)
        assert dispatcher.dispatch("Update Cue 3").success
        assert dispatcher.dispatch("Delete Cue 3").status is OutcomeStatus.AWAITING_CONFIRMATION

    def test_confirmation_disabled(self, host):
        """Test require_confirmation=False lets destructive commands through."""
        config = DispatcherConfig(require_confirmation=False)
        assert CommandDispatcher(host, config).dispatch("Blackout").success

    def test_safety_disabled(self, host):
        """Test check_safety=False skips classification."""
        config = DispatcherConfig(check_safety=False)
        outcome = CommandDispatcher(host, config).dispatch("Delete All")
        assert outcome.success
        assert outcome.safety is None


class TestModes:
    """Tests for host primitive selection."""

    @pytest.mark.parametrize(
        "mode,primitive",
        [
            (ExecutionMode.SYNC, "sync"),
            (ExecutionMode.ASYNC, "async"),
            (ExecutionMode.ASYNC_AND_WAIT, "async_and_wait"),
        ],
    )
    def test_mode_selects_primitive(self, host, mode, primitive):
        """Test each mode uses its primitive."""
        CommandDispatcher(host, DispatcherConfig(mode=mode)).dispatch("Go Cue 1")
        assert host.calls[0][0] == primitive

    def test_async_passes_target_handle(self, host):
        """Test the target handle reaches asynchronous primitives."""
        target = object()
        config = DispatcherConfig(mode=ExecutionMode.ASYNC)
        outcome = CommandDispatcher(host, config).dispatch("Go Cue 1", target_handle=target)
        assert host.calls == [("async", "Go Cue 1", None, target)]
        assert outcome.result == ""

    def test_recording_host_satisfies_protocol(self, host):
        """Test the test double matches the host protocol."""
        assert isinstance(host, HostRuntime)


class TestRetries:
    """Tests for retry and failure aggregation."""

    def test_failure_without_retry(self, host):
        """Test a single failing attempt fails the command."""
        host.fail("Go Cue 1")
        outcome = CommandDispatcher(host).dispatch("Go Cue 1")
        assert outcome.status is OutcomeStatus.FAILED
        assert outcome.error.code is ErrorCode.EXECUTION_FAILED
        assert outcome.error.message == (
            "Command failed after 1 attempt: attempt 1: Host rejected command (1)"
        )

    def test_retry_then_success(self, host):
        """Test a transient failure is retried."""
        host.fail("Go Cue 1", times=2)
        config = DispatcherConfig(max_attempts=3)
        outcome = CommandDispatcher(host, config).dispatch("Go Cue 1")
        assert outcome.success
        assert [a.success for a in outcome.attempts] == [False, False, True]
        assert [a.attempt_index for a in outcome.attempts] == [1, 2, 3]
        assert host.commands == ["Go Cue 1"] * 3

    def test_exhausted_retries_aggregate_messages(self, host):
        """Test the final error lists every attempt's message."""
        host.fail("Go Cue 1", times=3)
        config = DispatcherConfig(max_attempts=2)
        outcome = CommandDispatcher(host, config).dispatch("Go Cue 1")
        assert outcome.status is OutcomeStatus.FAILED
        assert "attempt 1: Host rejected command (1)" in outcome.error.message
        assert "attempt 2: Host rejected command (2)" in outcome.error.message
        assert len(host.calls) == 2

    def test_raise_for_status(self, host):
        """Test a failed outcome raises ExecutionError with attempt messages."""
        host.fail("Go Cue 1", times=2)
        outcome = CommandDispatcher(host, DispatcherConfig(max_attempts=2)).dispatch(
            "Go Cue 1"
        )
        with pytest.raises(ExecutionError) as exc_info:
            outcome.raise_for_status()
        assert exc_info.value.attempt_messages == [
            "Host rejected command (1)",
            "Host rejected command (2)",
        ]

    def test_max_attempts_must_be_positive(self):
        """Test the configuration refuses zero attempts."""
        with pytest.raises(ValueError):
            DispatcherConfig(max_attempts=0)


class TestTimeout:
    """Tests for best-effort timeouts."""

    def test_slow_attempt_times_out(self, host, slow_clock):
        """Test an attempt slower than the timeout is reported as timed out."""
        config = DispatcherConfig(timeout_seconds=1)
        outcome = CommandDispatcher(host, config, clock=slow_clock).dispatch("Go Cue 1")
        assert outcome.status is OutcomeStatus.TIMED_OUT
        assert outcome.error.code is ErrorCode.TIMEOUT
        assert outcome.error.message == "Command timed out after 1 seconds"
        assert host.commands == ["Go Cue 1"]

    def test_fast_attempt_succeeds(self, host, slow_clock):
        """Test attempts within the timeout succeed."""
        config = DispatcherConfig(timeout_seconds=10)
        outcome = CommandDispatcher(host, config, clock=slow_clock).dispatch("Go Cue 1")
        assert outcome.success
        assert outcome.attempts[0].elapsed == 5.0


class TestDispatchBatch:
    """Tests for sequential batches."""

    def test_all_succeed(self, host):
        """Test every command runs in order."""
        batch = CommandDispatcher(host).dispatch_batch(["Go Cue 1", "Go Cue 2"])
        assert batch.success
        assert not batch.halted
        assert host.commands == ["Go Cue 1", "Go Cue 2"]

    def test_halt_on_failure(self, host):
        """Test later commands are skipped after a failure."""
        host.fail("Go Cue 2")
        batch = CommandDispatcher(host).dispatch_batch(["Go Cue 1", "Go Cue 2", "Go Cue 3"])
        assert [o.status for o in batch] == [
            OutcomeStatus.SUCCEEDED,
            OutcomeStatus.FAILED,
            OutcomeStatus.SKIPPED,
        ]
        assert batch.halted
        assert len(batch.failures) == 1
        assert [o.command for o in batch.skipped] == ["Go Cue 3"]
        assert host.commands == ["Go Cue 1", "Go Cue 2"]

    def test_continue_on_failure(self, host):
        """Test failures are passed over when halting is off."""
        host.fail("Go Cue 2")
        config = DispatcherConfig(halt_on_failure=False)
        batch = CommandDispatcher(host, config).dispatch_batch(
            ["Go Cue 1", "Go Cue 2", "Go Cue 3"]
        )
        assert len(batch) == 3
        assert not batch.halted
        assert host.commands == ["Go Cue 1", "Go Cue 2", "Go Cue 3"]

    def test_rejection_halts(self, host):
        """Test a rejected command stops the batch too."""
        batch = CommandDispatcher(host).dispatch_batch(["Fixture 1 Thru", "Go Cue 1"])
        assert batch.outcomes[0].status is OutcomeStatus.REJECTED
        assert batch.outcomes[1].status is OutcomeStatus.SKIPPED
        assert host.calls == []

    def test_batch_raise_for_status_reports_position(self, host):
        """Test the batch position appears in a raised error."""
        batch = CommandDispatcher(host).dispatch_batch(["Go Cue 1", "Fixture 1 Thru"])
        with pytest.raises(CommandSyntaxError):
            batch.raise_for_status()

    def test_optimized_batch(self, host):
        """Test batches are optimized before dispatch when configured."""
        config = DispatcherConfig(optimize_batches=True)
        batch = CommandDispatcher(host, config).dispatch_batch(
            ["Select Fixture 1", "At 50", "Color Red"]
        )
        assert batch.success
        assert host.commands == ["Fixture 1 At 50 Color Red"]


class TestDispatchSpecAndTemplate:
    """Tests for building then dispatching."""

    def test_dispatch_spec(self, host):
        """Test specs are built and dispatched."""
        spec = PropertySpec(target="Fixture 1", properties={"intensity": 75}, modifiers={"fade": 3})
        assert CommandDispatcher(host).dispatch_spec(spec).success
        assert host.commands == ["Fixture 1 At 75 Fade 3"]

    def test_dispatch_template(self, host):
        """Test templates are generated and dispatched."""
        template = CommandTemplate("Go Cue {cue}", {"cue": ParamType.NUMBER})
        assert CommandDispatcher(host).dispatch_template(template, {"cue": 4}).success
        assert host.commands == ["Go Cue 4"]

    def test_dispatch_template_by_name(self, host):
        """Test registered templates are resolved by name."""
        outcome = CommandDispatcher(host).dispatch_template(
            "set_intensity", {"target": "Group 1", "intensity": 30}
        )
        assert outcome.success
        assert host.commands == ["Group 1 At 30"]

    def test_template_failure_rejected(self, host):
        """Test template errors become rejected outcomes."""
        outcome = CommandDispatcher(host).dispatch_template(
            "set_intensity", {"target": "Group 1", "intensity": 300}
        )
        assert outcome.status is OutcomeStatus.REJECTED
        assert outcome.error.code is ErrorCode.OUT_OF_RANGE
        assert host.calls == []

    def test_unknown_template_name(self, host):
        """Test unknown template names raise."""
        with pytest.raises(TemplateNotFoundError):
            CommandDispatcher(host).dispatch_template("nope", {})


class TestLogging:
    """Tests for dispatcher log records."""

    def test_success_logged_at_info(self, host, lightcmd_logs):
        """Test a successful attempt is logged at INFO."""
        CommandDispatcher(host).dispatch("Go Cue 1")
        infos = [r for r in lightcmd_logs.records if r.levelno == logging.INFO]
        assert any("Go Cue 1" in r.getMessage() for r in infos)

    def test_state_transitions_logged_at_debug(self, host, lightcmd_logs):
        """Test state transitions are logged at DEBUG."""
        CommandDispatcher(host).dispatch("Go Cue 1")
        messages = [r.getMessage() for r in lightcmd_logs.records if r.levelno == logging.DEBUG]
        assert "Dispatch state VALIDATING: Go Cue 1" in messages
        assert "Dispatch state SUCCEEDED: Go Cue 1" in messages

    def test_failures_logged(self, host, lightcmd_logs):
        """Test attempt failures warn and the final failure is an error."""
        host.fail("Go Cue 1")
        CommandDispatcher(host).dispatch("Go Cue 1")
        levels = [r.levelno for r in lightcmd_logs.records]
        assert logging.WARNING in levels
        assert logging.ERROR in levels


class TestCallableHost:
    """Tests for adapting plain host functions."""

    def test_sync(self):
        """Test the sync function receives command and undo handle."""
        calls = []
        host = CallableHost(lambda command, undo: calls.append((command, undo)) or "done")
        outcome = CommandDispatcher(host).dispatch("Go Cue 1")
        assert outcome.result == "done"
        assert calls == [("Go Cue 1", None)]

    def test_missing_primitive_fails_command(self):
        """Test a missing asynchronous primitive surfaces as a failed attempt."""
        host = CallableHost(lambda command, undo: "done")
        config = DispatcherConfig(mode=ExecutionMode.ASYNC)
        outcome = CommandDispatcher(host, config).dispatch("Go Cue 1")
        assert outcome.status is OutcomeStatus.FAILED
        assert "asynchronous primitive" in outcome.error.message
