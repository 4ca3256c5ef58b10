"""
Validation result value shared by every validator.
"""

from attrs import field, frozen

from lightcmd.core.result import CommandError, ErrorCode


@frozen
class ValidationResult:
    """
    Outcome of validating a command string.

    Params:
        valid: True when the command passed
        error: Message describing the failure, None when valid
        code: Error code of the failure, None when valid
        warnings: Non-fatal findings in discovery order
        suggestions: Suggested corrections in discovery order
    """

    valid: bool
    error: str | None = None
    code: ErrorCode | None = None
    warnings: tuple[str, ...] = field(default=(), converter=tuple)
    suggestions: tuple[str, ...] = field(default=(), converter=tuple)

    @classmethod
    def success(
        cls, warnings: list[str] | None = None, suggestions: list[str] | None = None
    ) -> "ValidationResult":
        return cls(True, None, None, warnings or (), suggestions or ())

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        suggestions: list[str] | None = None,
        warnings: list[str] | None = None,
    ) -> "ValidationResult":
        return cls(False, message, code, warnings or (), suggestions or ())

    def to_error(self, subject: str | None = None) -> CommandError | None:
        """
        Convert a failed result into a `CommandError`.

        Params:
            subject: The command the result describes

        Returns:
            CommandError for failed results, None for valid ones
        """
        if self.valid or self.code is None:
            return None
        suggestion = self.suggestions[0] if self.suggestions else None
        return CommandError(self.code, self.error or "", suggestion, subject)
