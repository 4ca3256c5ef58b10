"""
Structural validation of console command strings.

This module checks a raw command string for well-formedness before any
semantic interpretation: emptiness, quoting, parenthesization, control
characters and dangling keywords. It also reports non-fatal style warnings.
"""

import re

from lightcmd.config import DEFAULT_GRAMMAR, GrammarConfig
from lightcmd.core.result import ErrorCode
from lightcmd.validation.results import ValidationResult

# A quoted name counts as one token
TOKEN_PATTERN = re.compile(r'"[^"]*"|\S+')

NUMBER_PATTERN = re.compile(r"^[-+]?\d+(?:\.(?P<fraction>\d+))?$")


def tokenize(command: str) -> list[str]:
    """
    Split a command into space-delimited tokens, keeping quoted names whole.

    Params:
        command: Command string

    Returns:
        Tokens in order; quoted tokens keep their quotes
    """
    return TOKEN_PATTERN.findall(command)


class SyntaxValidator:
    """Validator for the structure of console command strings."""

    def __init__(self, grammar: GrammarConfig | None = None):
        self.grammar = grammar or DEFAULT_GRAMMAR

    def validate(self, command: str | None) -> ValidationResult:
        """
        Validate the structure of a command string.

        Checks run in a fixed order and the first failure is returned. When
        the command is well-formed the result may still carry warnings about
        numeric precision and keyword capitalization.

        Params:
            command: Raw command string

        Returns:
            ValidationResult describing the first structural failure, or success
        """
        if command is None or not command.strip():
            return ValidationResult.failure(
                ErrorCode.EMPTY,
                "Command cannot be empty",
                ["Enter a command such as 'Fixture 1 At 100'"],
            )

        trimmed = command.strip()

        if trimmed.count('"') % 2 != 0:
            return ValidationResult.failure(
                ErrorCode.UNBALANCED_QUOTES,
                "Unbalanced quotes in command",
                ["Close every quoted name with a matching '\"'"],
            )

        paren_error = self._check_parentheses(trimmed)
        if paren_error:
            return ValidationResult.failure(
                ErrorCode.UNBALANCED_PARENTHESES,
                paren_error,
                ["Make sure every '(' has a matching ')'"],
            )

        for column, char in enumerate(trimmed):
            if not char.isprintable():
                return ValidationResult.failure(
                    ErrorCode.CONTROL_CHARACTER,
                    f"Command contains control character {char!r} at column {column}",
                    ["Remove tabs, line breaks and other control characters"],
                )

        tokens = tokenize(trimmed)

        incomplete = self._check_incomplete_clause(tokens)
        if incomplete:
            message, suggestion = incomplete
            return ValidationResult.failure(
                ErrorCode.INCOMPLETE_CLAUSE, message, [suggestion]
            )

        warnings: list[str] = []
        suggestions: list[str] = []
        self._check_precision(tokens, warnings, suggestions)
        self._check_keyword_case(tokens, warnings, suggestions)
        return ValidationResult.success(warnings, suggestions)

    def _check_parentheses(self, command: str) -> str | None:
        open_columns: list[int] = []
        for column, char in enumerate(command):
            if char == "(":
                open_columns.append(column)
            elif char == ")":
                if not open_columns:
                    return (
                        "Unbalanced parentheses in command: "
                        f"unexpected ')' at column {column}"
                    )
                open_columns.pop()
        if open_columns:
            return (
                "Unbalanced parentheses in command: "
                f"unclosed '(' at column {open_columns[0]}"
            )
        return None

    def _canonical(self, token: str) -> str | None:
        lowered = token.lower()
        for keyword in self.grammar.canonical_keywords + self.grammar.clause_keywords:
            if keyword.lower() == lowered:
                return keyword
        return None

    def _check_incomplete_clause(self, tokens: list[str]) -> tuple[str, str] | None:
        last = tokens[-1]
        range_keyword = self.grammar.range_keyword
        if last.lower().endswith(range_keyword.lower()):
            return (
                f"Incomplete '{range_keyword}' range specification",
                f"Add an end value after '{range_keyword}', e.g. '1 {range_keyword} 10'",
            )
        if self.grammar.is_clause_keyword(last, case_sensitive=False):
            keyword = self._canonical(last) or last
            return (
                f"Missing value for '{keyword}'",
                f"Add a value after '{keyword}', e.g. '{keyword} 50'",
            )
        return None

    def _check_precision(
        self, tokens: list[str], warnings: list[str], suggestions: list[str]
    ) -> None:
        limit = self.grammar.max_decimal_places
        keyword = None
        for token in tokens:
            if self.grammar.is_clause_keyword(token, case_sensitive=False):
                keyword = self._canonical(token) or token
                continue
            match = NUMBER_PATTERN.match(token)
            if keyword is None or match is None:
                keyword = None
                continue
            fraction = match.group("fraction") or ""
            if len(fraction) > limit:
                warnings.append(
                    f"Value '{token}' for '{keyword}' has excessive decimal precision "
                    f"(more than {limit} decimal places)"
                )
                suggestions.append(f"Round '{token}' to {limit} decimal places")

    def _check_keyword_case(
        self, tokens: list[str], warnings: list[str], suggestions: list[str]
    ) -> None:
        seen = set()
        for token in tokens:
            if token in seen or token != token.lower():
                continue
            canonical = self._canonical(token)
            if canonical is None or canonical == token:
                continue
            seen.add(token)
            warnings.append(
                f"Keyword '{token}' is lowercase, consider '{canonical}'"
            )
            suggestions.append(f"Use '{canonical}' instead of '{token}'")


def validate_syntax(
    command: str | None, grammar: GrammarConfig | None = None
) -> ValidationResult:
    """
    Validate the structure of a command string.

    Convenience wrapper around `SyntaxValidator.validate`.

    Params:
        command: Raw command string
        grammar: Keyword tables to validate against (defaults to DEFAULT_GRAMMAR)

    Returns:
        ValidationResult
    """
    return SyntaxValidator(grammar).validate(command)
