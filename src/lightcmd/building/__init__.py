"""
LightCmd command building components.

This package provides structured command specs, value formatting and the
command builder.
"""

from lightcmd.building.builder import CommandBuilder, build, build_sequence
from lightcmd.building.formatting import (
    IntensityFormat,
    PositionFormat,
    TimeFormat,
    build_mixed_selection,
    escape_command_string,
    format_color,
    format_intensity,
    format_position,
    format_selection,
    format_selector,
    format_time,
    format_value,
)
from lightcmd.building.specs import (
    CommandSpec,
    CustomSpec,
    ObjectRange,
    PanTilt,
    PlaybackSpec,
    PropertySpec,
    PropertyValues,
    SelectionSpec,
    StorageSpec,
    TimingModifiers,
    parse_spec,
)

__all__ = [
    "CommandBuilder",
    "build",
    "build_sequence",
    "CommandSpec",
    "SelectionSpec",
    "PropertySpec",
    "StorageSpec",
    "PlaybackSpec",
    "CustomSpec",
    "ObjectRange",
    "PanTilt",
    "PropertyValues",
    "TimingModifiers",
    "parse_spec",
    "IntensityFormat",
    "PositionFormat",
    "TimeFormat",
    "build_mixed_selection",
    "escape_command_string",
    "format_color",
    "format_intensity",
    "format_position",
    "format_selection",
    "format_selector",
    "format_time",
    "format_value",
]
