"""
Result values and the closed error taxonomy of the command pipeline.

Validators and the template engine return `Ok` or `Err` instead of raising,
so a failure never crosses the pipeline boundary as an exception. Callers
that prefer exceptions can call `unwrap()`, which raises the exception class
matching the error's category.
"""

from enum import Enum
from typing import Generic, NoReturn, TypeVar

from attrs import frozen

from lightcmd.exceptions.core import (
    CommandSyntaxError,
    ErrorContext,
    ExecutionError,
    LightCmdError,
    ParameterError,
    SafetyWarning,
    TemplateError,
)

T = TypeVar("T")


class ErrorCategory(Enum):
    """Top-level error taxonomy."""

    SYNTAX = "syntax"
    PARAMETER = "parameter"
    SAFETY = "safety"
    TEMPLATE = "template"
    EXECUTION = "execution"


class ErrorCode(Enum):
    """Every failure the pipeline can report."""

    # Syntax
    EMPTY = "empty"
    UNBALANCED_QUOTES = "unbalanced_quotes"
    UNBALANCED_PARENTHESES = "unbalanced_parentheses"
    CONTROL_CHARACTER = "control_character"
    INCOMPLETE_CLAUSE = "incomplete_clause"
    WRONG_COMMAND_TYPE = "wrong_command_type"

    # Parameter
    NOT_NUMERIC = "not_numeric"
    OUT_OF_RANGE = "out_of_range"
    RANGE_ORDER = "range_order"
    INVALID_REFERENCE_FORMAT = "invalid_reference_format"
    NAME_TOO_LONG = "name_too_long"
    INVALID_COLOR_FORMAT = "invalid_color_format"
    PATTERN_MISMATCH = "pattern_mismatch"
    NOT_ALLOWED = "not_allowed"
    UNSUPPORTED_KIND = "unsupported_kind"

    # Safety
    CONFIRMATION_REQUIRED = "confirmation_required"
    CONTEXT_CONFLICT = "context_conflict"

    # Template
    MISSING_PARAMETER = "missing_parameter"
    TYPE_MISMATCH = "type_mismatch"
    UNRESOLVED_PLACEHOLDER = "unresolved_placeholder"

    # Execution
    EXECUTION_FAILED = "execution_failed"
    TIMEOUT = "timeout"

    @property
    def category(self) -> ErrorCategory:
        """Category this code belongs to."""
        return _CATEGORIES[self]


_CATEGORIES = {
    ErrorCode.EMPTY: ErrorCategory.SYNTAX,
    ErrorCode.UNBALANCED_QUOTES: ErrorCategory.SYNTAX,
    ErrorCode.UNBALANCED_PARENTHESES: ErrorCategory.SYNTAX,
    ErrorCode.CONTROL_CHARACTER: ErrorCategory.SYNTAX,
    ErrorCode.INCOMPLETE_CLAUSE: ErrorCategory.SYNTAX,
    ErrorCode.WRONG_COMMAND_TYPE: ErrorCategory.SYNTAX,
    ErrorCode.NOT_NUMERIC: ErrorCategory.PARAMETER,
    ErrorCode.OUT_OF_RANGE: ErrorCategory.PARAMETER,
    ErrorCode.RANGE_ORDER: ErrorCategory.PARAMETER,
    ErrorCode.INVALID_REFERENCE_FORMAT: ErrorCategory.PARAMETER,
    ErrorCode.NAME_TOO_LONG: ErrorCategory.PARAMETER,
    ErrorCode.INVALID_COLOR_FORMAT: ErrorCategory.PARAMETER,
    ErrorCode.PATTERN_MISMATCH: ErrorCategory.PARAMETER,
    ErrorCode.NOT_ALLOWED: ErrorCategory.PARAMETER,
    ErrorCode.UNSUPPORTED_KIND: ErrorCategory.PARAMETER,
    ErrorCode.CONFIRMATION_REQUIRED: ErrorCategory.SAFETY,
    ErrorCode.CONTEXT_CONFLICT: ErrorCategory.SAFETY,
    ErrorCode.MISSING_PARAMETER: ErrorCategory.TEMPLATE,
    ErrorCode.TYPE_MISMATCH: ErrorCategory.TEMPLATE,
    ErrorCode.UNRESOLVED_PLACEHOLDER: ErrorCategory.TEMPLATE,
    ErrorCode.EXECUTION_FAILED: ErrorCategory.EXECUTION,
    ErrorCode.TIMEOUT: ErrorCategory.EXECUTION,
}


@frozen
class CommandError:
    """
    A structured pipeline failure.

    Params:
        code: Closed error code
        message: Human-readable description
        suggestion: Optional suggested correction
        subject: The command, value or template the error is about
    """

    code: ErrorCode
    message: str
    suggestion: str | None = None
    subject: str | None = None

    @property
    def category(self) -> ErrorCategory:
        return self.code.category

    def to_exception(
        self,
        context: ErrorContext | None = None,
        attempt_messages: list[str] | None = None,
    ) -> LightCmdError:
        """
        Convert the error into the exception class of its category.

        Params:
            context: Location details for syntax and parameter errors
            attempt_messages: Per-attempt failures for execution errors

        Returns:
            Exception instance carrying this error's message and suggestion
        """
        subject = self.subject or ""
        category = self.category
        if category is ErrorCategory.SYNTAX:
            return CommandSyntaxError(subject, self.message, self.suggestion, context)
        if category is ErrorCategory.PARAMETER:
            return ParameterError(subject, self.message, self.suggestion, context)
        if category is ErrorCategory.SAFETY:
            return SafetyWarning(subject, self.message)
        if category is ErrorCategory.TEMPLATE:
            return TemplateError(subject, self.message, self.suggestion)
        return ExecutionError(subject, self.message, attempt_messages)

    def __str__(self) -> str:
        return self.message


@frozen
class Ok(Generic[T]):
    """Successful result holding a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@frozen
class Err:
    """Failed result holding a `CommandError`."""

    error: CommandError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """
        Raise the exception matching this error's category.

        Raises:
            LightCmdError: Always; the concrete subclass depends on the category
        """
        raise self.error.to_exception()

    def unwrap_or(self, default: T) -> T:
        return default


Result = Ok[T] | Err


def fail(
    code: ErrorCode,
    message: str,
    suggestion: str | None = None,
    subject: str | None = None,
) -> Err:
    """Shorthand for building an `Err` from its parts."""
    return Err(CommandError(code, message, suggestion, subject))
