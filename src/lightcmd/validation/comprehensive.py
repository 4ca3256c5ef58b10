"""
Combined command validation.

Runs the syntax, parameter, safety and context checks over one command and
gathers every finding into a single report, and checks whether a command
belongs to an expected category.
"""

import re
from enum import Enum

from attrs import field, frozen

from lightcmd.config import DEFAULT_GRAMMAR, GrammarConfig
from lightcmd.core.result import ErrorCode
from lightcmd.validation.parameters import (
    ParameterKind,
    PositionAxis,
    validate_color,
    validate_numeric,
    validate_object_reference,
)
from lightcmd.validation.results import ValidationResult
from lightcmd.validation.safety import classify
from lightcmd.validation.syntax import tokenize, validate_syntax

NUMERIC_TOKEN = re.compile(r"^[-+]?[\d.]+$")


class CommandCategory(Enum):
    """Broad category of a console command."""

    SELECTION = "selection"
    PROPERTY = "property"
    STORAGE = "storage"
    PLAYBACK = "playback"


class ConsoleMode(Enum):
    """Programmer output mode of the console."""

    LIVE = "live"
    BLIND = "blind"


CATEGORY_VERBS = {
    CommandCategory.STORAGE: ("store", "update", "copy", "move", "delete"),
    CommandCategory.PLAYBACK: ("go", "pause", "off", "on", "flash"),
}

TIMING_KINDS = {"Fade", "Delay", "Time"}


@frozen
class CommandContext:
    """
    Console state a command is validated against.

    Params:
        mode: Live or blind output
        has_selection: Whether objects are currently selected
        active_sequences: Number of sequences currently running
    """

    mode: ConsoleMode = ConsoleMode.LIVE
    has_selection: bool = False
    active_sequences: int = 0


@frozen
class ValidationOptions:
    """Which checks `validate_command` runs."""

    check_syntax: bool = True
    check_parameters: bool = True
    check_safety: bool = True
    check_context: bool = False


@frozen
class CommandReport:
    """
    Every finding for one command.

    Params:
        valid: True when no check produced an error
        errors: Error messages in check order
        warnings: Warning messages in check order
        suggestions: Suggested corrections in check order
        codes: Error codes matching `errors`
    """

    valid: bool
    errors: tuple[str, ...] = field(default=(), converter=tuple)
    warnings: tuple[str, ...] = field(default=(), converter=tuple)
    suggestions: tuple[str, ...] = field(default=(), converter=tuple)
    codes: tuple[ErrorCode, ...] = field(default=(), converter=tuple)


def validate_command_type(
    command: str | None,
    expected: CommandCategory,
    grammar: GrammarConfig | None = None,
) -> ValidationResult:
    """
    Check that a command belongs to the expected category.

    Params:
        command: Command string
        expected: Category the caller expects
        grammar: Grammar supplying the selection and property keywords

    Returns:
        ValidationResult with WRONG_COMMAND_TYPE on mismatch
    """
    grammar = grammar or DEFAULT_GRAMMAR
    if command is None:
        return ValidationResult.failure(ErrorCode.EMPTY, "Command cannot be empty")

    tokens = [t.lower() for t in tokenize(command.strip())]
    first = tokens[0] if tokens else ""

    if expected is CommandCategory.SELECTION:
        matched = (first == grammar.selection_keyword.lower() and len(tokens) > 1) or (
            len(tokens) == 1 and first in ("all", "clear")
        )
        message = "Expected selection command (Select, All, Clear)"
    elif expected is CommandCategory.PROPERTY:
        keywords = {k.lower() for k in grammar.property_keywords}
        matched = any(token in keywords for token in tokens[1:])
        message = "Expected property command (At, Color, Position, etc.)"
    else:
        verbs = CATEGORY_VERBS[expected]
        matched = first in verbs and len(tokens) > 1
        names = ", ".join(v.capitalize() for v in verbs)
        message = f"Expected {expected.value} command ({names})"

    if matched:
        return ValidationResult.success()
    return ValidationResult.failure(ErrorCode.WRONG_COMMAND_TYPE, message)


def validate_context(
    command: str | None,
    context: CommandContext,
    grammar: GrammarConfig | None = None,
) -> ValidationResult:
    """
    Check that a command makes sense in the current console state.

    Params:
        command: Command string
        context: Current console state
        grammar: Grammar supplying the property keywords

    Returns:
        ValidationResult with CONTEXT_CONFLICT and a suggestion on conflict
    """
    grammar = grammar or DEFAULT_GRAMMAR
    if not command or not command.strip():
        return ValidationResult.failure(ErrorCode.EMPTY, "Command cannot be empty")

    tokens = tokenize(command.strip())
    first = tokens[0].lower()

    if grammar.is_clause_keyword(tokens[0], case_sensitive=False) and not context.has_selection:
        return ValidationResult.failure(
            ErrorCode.CONTEXT_CONFLICT,
            "Property command requires object selection",
            ["Select objects before setting properties"],
        )

    if context.mode is ConsoleMode.BLIND and first == "flash":
        return ValidationResult.failure(
            ErrorCode.CONTEXT_CONFLICT,
            "Flash commands are not effective in blind mode",
            ["Flash commands don't work in blind mode"],
        )

    if context.mode is ConsoleMode.LIVE and first == "preview":
        return ValidationResult.failure(
            ErrorCode.CONTEXT_CONFLICT,
            "Preview commands should be used in blind mode",
            ["Use blind mode for preview operations"],
        )

    if context.active_sequences > 0 and first == "go":
        return ValidationResult.failure(
            ErrorCode.CONTEXT_CONFLICT,
            "Starting new sequences while others are active may cause conflicts",
            ["Consider stopping active sequences first"],
        )

    return ValidationResult.success()


def _collect_parameter_errors(
    tokens: list[str], grammar: GrammarConfig
) -> list[tuple[ErrorCode, str, str | None]]:
    findings = []

    def record(result) -> None:
        if result.is_err:
            error = result.error
            findings.append((error.code, error.message, error.suggestion))

    for index, token in enumerate(tokens):
        following = tokens[index + 1 :]
        if not following:
            break
        value = following[0]
        if token == "At" and NUMERIC_TOKEN.match(value):
            record(validate_numeric(value, ParameterKind.INTENSITY, grammar=grammar))
        elif token == "Color":
            record(validate_color(value, grammar))
        elif token == "Position":
            record(validate_numeric(value, ParameterKind.POSITION, PositionAxis.PAN, grammar))
            if len(following) > 1:
                record(
                    validate_numeric(
                        following[1], ParameterKind.POSITION, PositionAxis.TILT, grammar
                    )
                )
        elif token in TIMING_KINDS and NUMERIC_TOKEN.match(value):
            record(validate_numeric(value, ParameterKind.TIME, grammar=grammar))
        elif token == "Fixture":
            reference = []
            for part in following:
                if grammar.is_clause_keyword(part):
                    break
                reference.append(part)
            record(validate_object_reference(" ".join(reference), grammar))
    return findings


def validate_command(
    command: str | None,
    options: ValidationOptions | None = None,
    context: CommandContext | None = None,
    grammar: GrammarConfig | None = None,
) -> CommandReport:
    """
    Run every enabled check over one command and gather the findings.

    Parameter checks run only when the syntax is valid. Safety findings are
    warnings, never errors.

    Params:
        command: Command string
        options: Which checks to run (defaults to syntax, parameters and safety)
        context: Console state for the context check
        grammar: Grammar used by every check

    Returns:
        CommandReport
    """
    options = options or ValidationOptions()
    grammar = grammar or DEFAULT_GRAMMAR
    errors: list[str] = []
    codes: list[ErrorCode] = []
    warnings: list[str] = []
    suggestions: list[str] = []
    syntax_ok = True

    if options.check_syntax:
        syntax = validate_syntax(command, grammar)
        warnings.extend(syntax.warnings)
        suggestions.extend(syntax.suggestions)
        if not syntax.valid:
            syntax_ok = False
            errors.append(syntax.error or "")
            codes.append(syntax.code)

    if options.check_parameters and syntax_ok and command:
        for code, message, suggestion in _collect_parameter_errors(
            tokenize(command.strip()), grammar
        ):
            errors.append(message)
            codes.append(code)
            if suggestion:
                suggestions.append(suggestion)

    if options.check_safety and command:
        safety = classify(command, grammar)
        if safety.destructive:
            warnings.append(f"{safety.label}: {safety.reason}")
            suggestions.append("Consider using confirmation dialog for this command")

    if options.check_context and context is not None:
        result = validate_context(command, context, grammar)
        if not result.valid:
            errors.append(result.error or "")
            codes.append(result.code)
        suggestions.extend(result.suggestions)

    return CommandReport(not errors, errors, warnings, suggestions, codes)
