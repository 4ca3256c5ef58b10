"""
Per-attempt, per-command and per-batch execution results.
"""

from enum import Enum

from attrs import field, frozen

from lightcmd.core.result import CommandError
from lightcmd.exceptions.core import ErrorContext
from lightcmd.validation.safety import SafetyClassification


class DispatchState(Enum):
    """States of one dispatch call."""

    VALIDATING = "validating"
    CONFIRMING_SAFETY = "confirming_safety"
    EXECUTING = "executing"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OutcomeStatus(Enum):
    """Final status of one command."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"  # host failed on every attempt
    REJECTED = "rejected"  # failed validation, never executed
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    TIMED_OUT = "timed_out"
    SKIPPED = "skipped"  # not issued because the batch halted


@frozen
class ExecutionAttempt:
    """
    One call to the host.

    Params:
        command: Command sent
        success: Whether the host accepted it
        result: Host result string
        error: Failure message
        attempt_index: 1-based attempt number
        elapsed: Wall-clock seconds spent in the host call
    """

    command: str
    success: bool
    result: str | None = None
    error: str | None = None
    attempt_index: int = 1
    elapsed: float = 0.0


@frozen
class ExecutionOutcome:
    """
    Result of dispatching one command.

    Params:
        command: The command as dispatched
        status: Final status
        result: Host result string when succeeded
        error: Structured error for every non-successful status except SKIPPED
        attempts: Every host call made, in order
        warnings: Validation and safety warnings
        suggestions: Suggested corrections
        safety: Safety classification when safety checking ran
    """

    command: str
    status: OutcomeStatus
    result: str | None = None
    error: CommandError | None = None
    attempts: tuple[ExecutionAttempt, ...] = field(default=(), converter=tuple)
    warnings: tuple[str, ...] = field(default=(), converter=tuple)
    suggestions: tuple[str, ...] = field(default=(), converter=tuple)
    safety: SafetyClassification | None = None

    @property
    def success(self) -> bool:
        return self.status is OutcomeStatus.SUCCEEDED

    @property
    def executed(self) -> bool:
        return bool(self.attempts)

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.message
        if self.status is OutcomeStatus.SKIPPED:
            return "Skipped after an earlier failure"
        return self.result or ""

    def raise_for_status(self, batch_index: int | None = None) -> None:
        """
        Raise the exception matching this outcome's error, if any.

        Params:
            batch_index: Position of this outcome in its batch, for the message

        Raises:
            LightCmdError: When the outcome carries an error
        """
        if self.error is None:
            return
        context = ErrorContext(
            command_text=self.command,
            batch_index=batch_index,
            attempt_index=len(self.attempts) or None,
        )
        raise self.error.to_exception(
            context, [a.error for a in self.attempts if a.error]
        )


@frozen
class BatchOutcome:
    """
    Result of dispatching a sequence of commands.

    Params:
        outcomes: One outcome per command, in order, including skipped ones
        halted: Whether the batch stopped early
    """

    outcomes: tuple[ExecutionOutcome, ...] = field(converter=tuple)
    halted: bool = False

    @property
    def success(self) -> bool:
        return all(outcome.success for outcome in self.outcomes)

    @property
    def failures(self) -> list[ExecutionOutcome]:
        return [
            o
            for o in self.outcomes
            if not o.success and o.status is not OutcomeStatus.SKIPPED
        ]

    @property
    def skipped(self) -> list[ExecutionOutcome]:
        return [o for o in self.outcomes if o.status is OutcomeStatus.SKIPPED]

    def raise_for_status(self) -> None:
        """Raise for the first unsuccessful command of the batch, if any."""
        for index, outcome in enumerate(self.outcomes, start=1):
            outcome.raise_for_status(batch_index=index)

    def __len__(self) -> int:
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)
