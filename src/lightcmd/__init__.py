"""
LightCmd - validated command generation for lighting console plugins

LightCmd builds, validates, optimizes and dispatches the text commands of a
lighting console's command line.
"""

from importlib.metadata import version

from lightcmd.building import CommandBuilder, build, build_sequence, parse_spec
from lightcmd.config import DEFAULT_GRAMMAR, DispatcherConfig, GrammarConfig
from lightcmd.core import CommandError, Err, ErrorCategory, ErrorCode, Ok, Result
from lightcmd.diagnostics import attach_diagnostic_sink, detach_diagnostic_sink
from lightcmd.execution import CallableHost, CommandDispatcher, HostRuntime
from lightcmd.optimization import optimize
from lightcmd.templates import CommandTemplate, TemplateRegistry, get_command_template
from lightcmd.validation import (
    classify,
    validate_command,
    validate_numeric,
    validate_object_reference,
    validate_syntax,
)

__version__ = version("lightcmd")

__all__ = [
    "__version__",
    "CallableHost",
    "CommandBuilder",
    "CommandDispatcher",
    "CommandError",
    "CommandTemplate",
    "DEFAULT_GRAMMAR",
    "DispatcherConfig",
    "Err",
    "ErrorCategory",
    "ErrorCode",
    "GrammarConfig",
    "HostRuntime",
    "Ok",
    "Result",
    "TemplateRegistry",
    "attach_diagnostic_sink",
    "build",
    "build_sequence",
    "classify",
    "detach_diagnostic_sink",
    "get_command_template",
    "optimize",
    "parse_spec",
    "validate_command",
    "validate_numeric",
    "validate_object_reference",
    "validate_syntax",
]
