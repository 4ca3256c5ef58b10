"""
LightCmd template components.

This package provides typed command templates and the template registry.
"""

from lightcmd.templates.engine import CommandTemplate, ParamType
from lightcmd.templates.registry import (
    PREDEFINED_TEMPLATES,
    TemplateRegistry,
    default_registry,
    get_command_template,
)

__all__ = [
    "CommandTemplate",
    "ParamType",
    "TemplateRegistry",
    "PREDEFINED_TEMPLATES",
    "default_registry",
    "get_command_template",
]
