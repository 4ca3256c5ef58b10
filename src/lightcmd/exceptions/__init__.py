"""
LightCmd exception classes.

This package provides all exception types used throughout the LightCmd
pipeline for consistent error handling and reporting.
"""

from lightcmd.exceptions.core import (
    CommandSyntaxError,
    DuplicateTemplateError,
    ErrorContext,
    ErrorLevel,
    ExecutionError,
    LightCmdError,
    ParameterError,
    SafetyWarning,
    TemplateError,
    TemplateNotFoundError,
)

__all__ = [
    "LightCmdError",
    "CommandSyntaxError",
    "ParameterError",
    "SafetyWarning",
    "TemplateError",
    "ExecutionError",
    "TemplateNotFoundError",
    "DuplicateTemplateError",
    "ErrorContext",
    "ErrorLevel",
]
