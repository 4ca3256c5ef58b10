"""
Core LightCmd components.

This package provides the fundamental building blocks of the command
pipeline: type aliases, result values and the error taxonomy.
"""

from lightcmd.core.result import (
    CommandError,
    Err,
    ErrorCategory,
    ErrorCode,
    Ok,
    Result,
    fail,
)
from lightcmd.core.types import CommandString, DiagnosticSink, Handle, ParamValue

__all__ = [
    "CommandError",
    "CommandString",
    "DiagnosticSink",
    "Err",
    "ErrorCategory",
    "ErrorCode",
    "Handle",
    "Ok",
    "ParamValue",
    "Result",
    "fail",
]
