"""
Exception classes for the LightCmd command pipeline.

This module defines specific exception types for the error categories that
can occur while validating, templating and dispatching console commands.
Validators never raise these across the pipeline boundary; they are produced
by `Err.unwrap()` for callers that prefer exceptions to result values.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorLevel(Enum):
    """Error message detail level for end users vs developers."""

    USER = "user"  # Message and suggestion only
    DEVELOPER = "developer"  # Adds column, template and batch positions


@dataclass
class ErrorContext:
    """
    Context information for error messages.

    Captures where an error occurred in command terms (the command text and
    column) and in pipeline terms (template name, batch position, attempt).

    Params:
        command_text: The command text that caused the error
        column: Zero-based character offset of the offending character
        template_name: Name of the template being expanded, if any
        batch_index: Position of the command within a dispatched batch
        attempt_index: Execution attempt number (1-based)
    """

    command_text: str | None = None
    column: int | None = None
    template_name: str | None = None
    batch_index: int | None = None
    attempt_index: int | None = None

    def format_location(self, error_level: ErrorLevel) -> str:
        """
        Format location information based on error level.

        Params:
            error_level: Whether to show USER or DEVELOPER level details

        Returns:
            Formatted location string with appropriate detail level
        """
        lines = []

        if self.command_text:
            lines.append(f"  command: {self.command_text}")

        if error_level == ErrorLevel.DEVELOPER:
            if self.column is not None and self.command_text:
                lines.append(f"           {' ' * self.column}^ column {self.column}")
            if self.template_name:
                lines.append(f"  template: {self.template_name}")
            if self.batch_index is not None:
                lines.append(f"  batch position: {self.batch_index}")
            if self.attempt_index is not None:
                lines.append(f"  attempt: {self.attempt_index}")

        return "\n".join(lines)


def _with_details(
    primary: str,
    suggestion: str | None,
    context: ErrorContext | None,
    error_level: ErrorLevel,
) -> str:
    parts = [primary]
    if suggestion:
        parts.append(f"  suggestion: {suggestion}")
    if context:
        location = context.format_location(error_level)
        if location:
            parts.append(location)
    return "\n".join(parts)


class LightCmdError(Exception):
    """Base exception for all LightCmd errors."""

    pass


class CommandSyntaxError(LightCmdError):
    """Raised when a command string is structurally malformed."""

    def __init__(
        self,
        command: str,
        reason: str,
        suggestion: str | None = None,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            command: The malformed command string
            reason: Why the command is malformed
            suggestion: Optional suggested correction
            context: ErrorContext with location information
            error_level: Level of detail to show in error message
        """
        self.command = command
        self.reason = reason
        self.suggestion = suggestion
        self.context = context
        super().__init__(
            _with_details(
                f"Invalid command syntax '{command}': {reason}",
                suggestion,
                context,
                error_level,
            )
        )


class ParameterError(LightCmdError):
    """Raised when a value is outside its declared range or shape."""

    def __init__(
        self,
        value: str,
        reason: str,
        suggestion: str | None = None,
        context: ErrorContext | None = None,
        error_level: ErrorLevel = ErrorLevel.USER,
    ):
        """
        Initialize the exception.

        Params:
            value: The offending value as text
            reason: Why the value was rejected
            suggestion: Optional suggested correction
            context: ErrorContext with location information
            error_level: Level of detail to show in error message
        """
        self.value = value
        self.reason = reason
        self.suggestion = suggestion
        self.context = context
        super().__init__(
            _with_details(
                f"Invalid parameter '{value}': {reason}",
                suggestion,
                context,
                error_level,
            )
        )


class SafetyWarning(LightCmdError):
    """Raised when a destructive command needs explicit confirmation."""

    def __init__(self, command: str, reason: str, severity: str | None = None):
        """
        Initialize the exception.

        Params:
            command: The destructive command
            reason: What the command would destroy
            severity: Severity level name, if known
        """
        self.command = command
        self.reason = reason
        self.severity = severity
        label = f" [{severity}]" if severity else ""
        super().__init__(f"Command '{command}' requires confirmation{label}: {reason}")


class TemplateError(LightCmdError):
    """Raised when a template cannot be expanded."""

    def __init__(
        self,
        template_name: str,
        reason: str,
        suggestion: str | None = None,
    ):
        """
        Initialize the exception.

        Params:
            template_name: Name or pattern of the template
            reason: Why expansion failed
            suggestion: Optional suggested correction
        """
        self.template_name = template_name
        self.reason = reason
        self.suggestion = suggestion
        super().__init__(
            _with_details(
                f"Template '{template_name}' failed: {reason}",
                suggestion,
                None,
                ErrorLevel.USER,
            )
        )


class ExecutionError(LightCmdError):
    """Raised when the host runtime failed to execute a command."""

    def __init__(
        self,
        command: str,
        reason: str,
        attempt_messages: list[str] | None = None,
    ):
        """
        Initialize the exception.

        Params:
            command: The command that failed
            reason: Aggregated failure description
            attempt_messages: Failure message of every attempt, in order
        """
        self.command = command
        self.reason = reason
        self.attempt_messages = list(attempt_messages or [])
        super().__init__(f"Execution of '{command}' failed: {reason}")


class TemplateNotFoundError(LightCmdError, KeyError):
    """Raised when a template name is not registered."""

    def __init__(self, name: str, available: list[str]):
        """
        Initialize the exception.

        Params:
            name: The requested template name
            available: Registered template names
        """
        self.name = name
        self.available = available
        super().__init__(
            f"Template {name} is not registered. Available templates: {available}"
        )

    def __str__(self) -> str:
        return self.args[0]


class DuplicateTemplateError(LightCmdError):
    """Raised when registering a template name that already exists."""

    def __init__(self, name: str):
        """
        Initialize the exception.

        Params:
            name: The template name that is already registered
        """
        self.name = name
        super().__init__(
            f"Template '{name}' already exists; use set_template() to overwrite it"
        )
