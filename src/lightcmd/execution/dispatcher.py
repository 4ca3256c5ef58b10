"""
Command dispatch to the console host.

`CommandDispatcher` runs each command through validation, the safety gate
and the host primitive selected by its configuration:

    VALIDATING -> CONFIRMING_SAFETY -> EXECUTING -> SUCCEEDED
                                           |
                                        RETRYING -> EXECUTING ... -> FAILED

Nothing raises out of `dispatch`; every failure becomes an `ExecutionOutcome`
carrying a `CommandError`.
"""

import logging
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from lightcmd.building.builder import CommandBuilder
from lightcmd.config import DEFAULT_GRAMMAR, DispatcherConfig, GrammarConfig
from lightcmd.core.numbers import format_number
from lightcmd.core.result import CommandError, ErrorCode
from lightcmd.core.types import Handle, ParamValue
from lightcmd.execution.host import HostRuntime, invoke
from lightcmd.execution.outcomes import (
    BatchOutcome,
    DispatchState,
    ExecutionAttempt,
    ExecutionOutcome,
    OutcomeStatus,
)
from lightcmd.optimization.optimizer import optimize
from lightcmd.templates.engine import CommandTemplate
from lightcmd.templates.registry import TemplateRegistry, default_registry
from lightcmd.validation.comprehensive import ValidationOptions, validate_command
from lightcmd.validation.safety import (
    SafetyClassification,
    classify,
    requires_confirmation,
)
from lightcmd.validation.syntax import validate_syntax

logger = logging.getLogger(__name__)

_PARAMETER_CHECKS = ValidationOptions(
    check_syntax=False, check_parameters=True, check_safety=False
)


class CommandDispatcher:
    """
    Validates and executes commands against a host runtime.

    Params:
        host: Console primitives
        config: Execution policy
        grammar: Grammar used by validation, safety and optimization
        registry: Templates resolved by name in `dispatch_template`
        clock: Monotonic clock in seconds, used for best-effort timeouts
    """

    def __init__(
        self,
        host: HostRuntime,
        config: DispatcherConfig | None = None,
        grammar: GrammarConfig | None = None,
        registry: TemplateRegistry | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.host = host
        self.config = config or DispatcherConfig()
        self.grammar = grammar or DEFAULT_GRAMMAR
        self.registry = registry if registry is not None else default_registry
        self.builder = CommandBuilder(self.grammar.selection_keyword)
        self.clock = clock

    def dispatch(
        self,
        command: str | None,
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
        confirmed: bool = False,
    ) -> ExecutionOutcome:
        """
        Validate and execute one command.

        Params:
            command: Command string
            undo_handle: Passed through to the host
            target_handle: Passed through to the asynchronous host primitives
            confirmed: The user already confirmed a destructive command

        Returns:
            ExecutionOutcome. REJECTED and AWAITING_CONFIRMATION outcomes made
            no host call.
        """
        self._transition(command, DispatchState.VALIDATING)
        syntax = validate_syntax(command, self.grammar)
        for warning in syntax.warnings:
            logger.warning("Syntax warning for '%s': %s", command, warning)
        if not syntax.valid:
            logger.error("Command rejected: %s (%s)", syntax.error, command)
            return ExecutionOutcome(
                command or "",
                OutcomeStatus.REJECTED,
                error=syntax.to_error(command),
                warnings=syntax.warnings,
                suggestions=syntax.suggestions,
            )

        command = command.strip()
        warnings = list(syntax.warnings)
        suggestions = list(syntax.suggestions)

        if self.config.check_parameters:
            report = validate_command(command, _PARAMETER_CHECKS, grammar=self.grammar)
            if not report.valid:
                logger.error("Command rejected: %s (%s)", "; ".join(report.errors), command)
                suggestions.extend(report.suggestions)
                error = CommandError(
                    report.codes[0],
                    "; ".join(report.errors),
                    report.suggestions[0] if report.suggestions else None,
                    command,
                )
                return ExecutionOutcome(
                    command,
                    OutcomeStatus.REJECTED,
                    error=error,
                    warnings=warnings,
                    suggestions=suggestions,
                )

        safety = None
        if self.config.check_safety:
            self._transition(command, DispatchState.CONFIRMING_SAFETY)
            safety = classify(command, self.grammar)
            if safety.destructive:
                warnings.append(f"{safety.label}: {safety.reason}")
            if (
                self.config.require_confirmation
                and not confirmed
                and requires_confirmation(safety, self.config.confirmation_threshold)
            ):
                logger.warning(
                    "Command '%s' needs confirmation: %s", command, safety.reason
                )
                error = CommandError(
                    ErrorCode.CONFIRMATION_REQUIRED,
                    f"Destructive command requires confirmation: {safety.reason}",
                    "Dispatch again with confirmed=True once the user agrees",
                    command,
                )
                return ExecutionOutcome(
                    command,
                    OutcomeStatus.AWAITING_CONFIRMATION,
                    error=error,
                    warnings=warnings,
                    suggestions=suggestions,
                    safety=safety,
                )

        return self._execute(
            command, undo_handle, target_handle, warnings, suggestions, safety
        )

    def _execute(
        self,
        command: str,
        undo_handle: Handle | None,
        target_handle: Handle | None,
        warnings: list[str],
        suggestions: list[str],
        safety: SafetyClassification | None,
    ) -> ExecutionOutcome:
        attempts: list[ExecutionAttempt] = []
        max_attempts = self.config.max_attempts
        timeout = self.config.timeout_seconds

        for index in range(1, max_attempts + 1):
            self._transition(command, DispatchState.EXECUTING)
            started = self.clock()
            try:
                result = invoke(
                    self.host, self.config.mode, command, undo_handle, target_handle
                )
            except Exception as e:
                message = str(e) or type(e).__name__
                attempts.append(
                    ExecutionAttempt(
                        command, False, None, message, index, self.clock() - started
                    )
                )
                logger.warning(
                    "Attempt %d/%d failed for '%s': %s",
                    index,
                    max_attempts,
                    command,
                    message,
                )
                if index < max_attempts:
                    self._transition(command, DispatchState.RETRYING)
                continue

            elapsed = self.clock() - started
            if timeout is not None and elapsed > timeout:
                message = f"Command timed out after {format_number(timeout)} seconds"
                attempts.append(
                    ExecutionAttempt(command, False, result, message, index, elapsed)
                )
                self._transition(command, DispatchState.FAILED)
                logger.error("%s: %s", message, command)
                return ExecutionOutcome(
                    command,
                    OutcomeStatus.TIMED_OUT,
                    result=result,
                    error=CommandError(
                        ErrorCode.TIMEOUT,
                        message,
                        "Check the console for a stalled command",
                        command,
                    ),
                    attempts=attempts,
                    warnings=warnings,
                    suggestions=suggestions,
                    safety=safety,
                )

            attempts.append(
                ExecutionAttempt(command, True, result, None, index, elapsed)
            )
            self._transition(command, DispatchState.SUCCEEDED)
            logger.info("Command executed: %s -> %s", command, result or "OK")
            return ExecutionOutcome(
                command,
                OutcomeStatus.SUCCEEDED,
                result=result,
                attempts=attempts,
                warnings=warnings,
                suggestions=suggestions,
                safety=safety,
            )

        self._transition(command, DispatchState.FAILED)
        plural = "s" if max_attempts != 1 else ""
        details = "; ".join(
            f"attempt {attempt.attempt_index}: {attempt.error}" for attempt in attempts
        )
        message = f"Command failed after {max_attempts} attempt{plural}: {details}"
        logger.error("%s (%s)", message, command)
        return ExecutionOutcome(
            command,
            OutcomeStatus.FAILED,
            error=CommandError(ErrorCode.EXECUTION_FAILED, message, subject=command),
            attempts=attempts,
            warnings=warnings,
            suggestions=suggestions,
            safety=safety,
        )

    def dispatch_batch(
        self,
        commands: Iterable[str],
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
        confirmed: bool = False,
    ) -> BatchOutcome:
        """
        Dispatch commands one after another.

        With `halt_on_failure`, the first unsuccessful command stops the batch
        and every later command is reported as SKIPPED without reaching the
        host. Otherwise failures are passed over.

        Params:
            commands: Command strings in execution order
            undo_handle: Shared undo handle for every command
            target_handle: Shared target handle for every command
            confirmed: Confirmation applying to every command of the batch

        Returns:
            BatchOutcome with one outcome per (optimized) command
        """
        commands = list(commands)
        if self.config.optimize_batches:
            optimized = optimize(commands, self.grammar)
            logger.debug(
                "Optimized batch from %d to %d commands", len(commands), len(optimized)
            )
            commands = optimized

        outcomes: list[ExecutionOutcome] = []
        halted = False
        for index, command in enumerate(commands, start=1):
            if halted:
                outcomes.append(ExecutionOutcome(command, OutcomeStatus.SKIPPED))
                continue
            outcome = self.dispatch(command, undo_handle, target_handle, confirmed)
            outcomes.append(outcome)
            if not outcome.success and self.config.halt_on_failure:
                logger.error(
                    "Command sequence stopped at command %d due to error: %s",
                    index,
                    outcome.message,
                )
                halted = True
        return BatchOutcome(outcomes, halted)

    def dispatch_spec(
        self,
        spec: Any,
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
        confirmed: bool = False,
    ) -> ExecutionOutcome:
        """Build a command from a CommandSpec (model or dict) and dispatch it."""
        return self.dispatch(
            self.builder.build(spec), undo_handle, target_handle, confirmed
        )

    def dispatch_template(
        self,
        template: CommandTemplate | str,
        values: Mapping[str, ParamValue],
        undo_handle: Handle | None = None,
        target_handle: Handle | None = None,
        confirmed: bool = False,
    ) -> ExecutionOutcome:
        """
        Generate a command from a template and dispatch it.

        Params:
            template: Template or the name of a registered template
            values: Parameter values

        Returns:
            REJECTED outcome carrying the template error when generation
            fails, otherwise the dispatch outcome

        Raises:
            TemplateNotFoundError: If a template name is not registered
        """
        if isinstance(template, str):
            template = self.registry.get_template(template)
        generated = template.generate(values, self.grammar)
        if generated.is_err:
            logger.error("Template rejected: %s", generated.error.message)
            return ExecutionOutcome(
                template.name or template.pattern,
                OutcomeStatus.REJECTED,
                error=generated.error,
            )
        return self.dispatch(generated.value, undo_handle, target_handle, confirmed)

    @staticmethod
    def _transition(command: str | None, state: DispatchState) -> None:
        logger.debug("Dispatch state %s: %s", state.name, command)
