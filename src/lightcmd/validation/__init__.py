"""
LightCmd validation components.

This package provides syntax validation, parameter validation, destructive
command classification and combined command validation.
"""

from lightcmd.validation.comprehensive import (
    CommandCategory,
    CommandContext,
    CommandReport,
    ConsoleMode,
    ValidationOptions,
    validate_command,
    validate_command_type,
    validate_context,
)
from lightcmd.validation.parameters import (
    ColorFormat,
    ColorValue,
    MultiReference,
    NameReference,
    ParameterConstraints,
    ParameterKind,
    ParameterSpec,
    PositionAxis,
    RangeReference,
    ReferenceShape,
    SingleReference,
    check_constraints,
    validate_color,
    validate_numeric,
    validate_object_reference,
    validate_parameter,
)
from lightcmd.validation.results import ValidationResult
from lightcmd.validation.safety import (
    SafetyClassification,
    classify,
    requires_confirmation,
)
from lightcmd.validation.syntax import SyntaxValidator, tokenize, validate_syntax

__all__ = [
    "ValidationResult",
    "SyntaxValidator",
    "validate_syntax",
    "tokenize",
    "ParameterKind",
    "PositionAxis",
    "ParameterConstraints",
    "ParameterSpec",
    "SingleReference",
    "RangeReference",
    "MultiReference",
    "NameReference",
    "ReferenceShape",
    "ColorFormat",
    "ColorValue",
    "validate_numeric",
    "validate_object_reference",
    "validate_color",
    "validate_parameter",
    "check_constraints",
    "SafetyClassification",
    "classify",
    "requires_confirmation",
    "CommandCategory",
    "CommandContext",
    "CommandReport",
    "ConsoleMode",
    "ValidationOptions",
    "validate_command",
    "validate_command_type",
    "validate_context",
]
