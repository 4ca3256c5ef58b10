"""
Command templates with typed, constrained placeholders.

A template is a pattern such as `"Fixture {fixtures} At {intensity}"` plus a
declaration of each placeholder's type and optional constraints. Generating
a command checks every declared parameter, applies the constraints through
the parameter validators and substitutes the placeholders.
"""

import re
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from attrs import field, frozen

from lightcmd.config import GrammarConfig
from lightcmd.core.numbers import format_number, parse_number
from lightcmd.core.result import CommandError, Err, ErrorCode, Ok, Result, fail
from lightcmd.core.types import ParamValue
from lightcmd.validation.parameters import (
    ParameterConstraints,
    ParameterSpec,
    check_constraints,
    validate_parameter,
)

PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")


class ParamType(Enum):
    """Declared type of a template parameter."""

    NUMBER = "number"
    TEXT = "string"
    BOOLEAN = "boolean"


def _freeze_types(value: Mapping[str, ParamType | str]) -> Mapping[str, ParamType]:
    return MappingProxyType(
        {
            name: t if isinstance(t, ParamType) else ParamType(t)
            for name, t in (value or {}).items()
        }
    )


def _freeze_rules(
    value: Mapping[str, ParameterConstraints | Mapping],
) -> Mapping[str, ParameterConstraints]:
    return MappingProxyType(
        {
            name: rule if isinstance(rule, ParameterConstraints) else ParameterConstraints(**rule)
            for name, rule in (value or {}).items()
        }
    )


def _coerce(value: ParamValue, param_type: ParamType) -> ParamValue | None:
    if param_type is ParamType.NUMBER:
        return parse_number(value)
    if param_type is ParamType.BOOLEAN:
        return value if isinstance(value, bool) else None
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    number = parse_number(value)
    return format_number(number) if number is not None else None


def _render(value: ParamValue) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


@frozen
class CommandTemplate:
    """
    Reusable command pattern with named placeholders.

    Params:
        pattern: Command pattern, placeholders written as {name}
        parameters: Declared parameter name to ParamType (or its string value)
        rules: Parameter name to ParameterConstraints (or a dict of its fields).
            Every name must also be declared in `parameters`
        name: Registry name, used in error messages

    Raises:
        ValueError: If a rule names an undeclared parameter
    """

    pattern: str
    parameters: Mapping[str, ParamType] = field(factory=dict, converter=_freeze_types)
    rules: Mapping[str, ParameterConstraints] = field(
        factory=dict, converter=_freeze_rules
    )
    name: str | None = None

    @rules.validator
    def _check_rules(self, attribute, value):
        undeclared = [param for param in value if param not in self.parameters]
        if undeclared:
            raise ValueError(
                f"Rules given for undeclared parameters: {', '.join(undeclared)}"
            )

    @property
    def placeholders(self) -> tuple[str, ...]:
        """Placeholder names in pattern order, without duplicates."""
        return tuple(dict.fromkeys(PLACEHOLDER_PATTERN.findall(self.pattern)))

    def generate(
        self,
        values: Mapping[str, ParamValue],
        grammar: GrammarConfig | None = None,
    ) -> Result[str]:
        """
        Generate a command from parameter values.

        Declared parameters are checked in declaration order: presence, type
        coercion, then constraints. Values violating a constraint are
        rejected, never clamped. Undeclared values are substituted as given.

        Params:
            values: Parameter name to value
            grammar: Grammar supplying kind ranges for constrained parameters

        Returns:
            Ok with the command string, or Err with MISSING_PARAMETER,
            TYPE_MISMATCH, a constraint violation or UNRESOLVED_PLACEHOLDER
        """
        label = self.name or self.pattern
        rendered: dict[str, str] = {}

        for param, param_type in self.parameters.items():
            raw = values.get(param)
            if raw is None:
                return fail(
                    ErrorCode.MISSING_PARAMETER,
                    f"Missing required parameter: {param}",
                    f"Supply a value for '{param}'",
                    label,
                )

            coerced = _coerce(raw, param_type)
            if coerced is None:
                return fail(
                    ErrorCode.TYPE_MISMATCH,
                    f"Parameter '{param}' must be a {param_type.value}, got {type(raw).__name__}: {raw!r}",
                    subject=label,
                )

            rule = self.rules.get(param)
            if rule is not None:
                checked = self._apply_rule(param, coerced, rule, grammar)
                if checked.is_err:
                    return checked

            rendered[param] = _render(coerced)

        for param, raw in values.items():
            if param not in rendered and raw is not None:
                rendered[param] = _render(raw)

        leftover = [name for name in self.placeholders if name not in rendered]
        if leftover:
            names = ", ".join("{" + name + "}" for name in leftover)
            return fail(
                ErrorCode.UNRESOLVED_PLACEHOLDER,
                f"Command contains unreplaced placeholders: {names}",
                "Declare and supply every placeholder used in the pattern",
                label,
            )
        return Ok(
            PLACEHOLDER_PATTERN.sub(lambda m: rendered[m.group(1)], self.pattern)
        )

    def _apply_rule(
        self,
        param: str,
        value: ParamValue,
        rule: ParameterConstraints,
        grammar: GrammarConfig | None,
    ) -> Result:
        if rule.kind is not None:
            result = validate_parameter(value, ParameterSpec(rule.kind, rule), grammar)
        else:
            result = check_constraints(value, rule, label=f"Parameter '{param}'")
        if result.is_ok:
            return result
        error = result.error
        message = error.message
        if not message.startswith(f"Parameter '{param}'"):
            message = f"Parameter '{param}': {message}"
        return Err(CommandError(error.code, message, error.suggestion, error.subject))
