"""
Composition of command strings from structured specs.

The builder never validates: specs are assumed to hold values that already
passed validation, so programmatically generated specs skip redundant
checks. Property clauses are always emitted in one fixed order because some
consoles are order-sensitive in chained modifiers.
"""

import logging
from collections.abc import Iterable
from typing import Any

from lightcmd.building.formatting import (
    format_color,
    format_pan_tilt,
    format_selection,
    format_value,
)
from lightcmd.building.specs import (
    CustomSpec,
    PlaybackSpec,
    PropertySpec,
    SelectionSpec,
    StorageSpec,
    parse_spec,
)
from lightcmd.core.numbers import format_number

logger = logging.getLogger(__name__)


class CommandBuilder:
    """Builds command strings from `CommandSpec` values."""

    def __init__(self, selection_keyword: str = "Select"):
        self.selection_keyword = selection_keyword

    def build(self, spec: Any) -> str:
        """
        Build one command string.

        Params:
            spec: A CommandSpec model or a dict with a `kind` key

        Returns:
            The command string (empty for a property spec with nothing set)
        """
        spec = parse_spec(spec)
        if isinstance(spec, SelectionSpec):
            return f"{self.selection_keyword} {format_selection(spec.object_type, spec.selector)}"
        if isinstance(spec, PropertySpec):
            return self._build_property(spec)
        if isinstance(spec, (StorageSpec, PlaybackSpec)):
            parts = [spec.action, spec.target]
            for key, value in spec.options.items():
                parts.append(f"{key} {format_value(value)}")
            return " ".join(parts)
        if isinstance(spec, CustomSpec):
            return spec.raw
        raise TypeError(f"Unsupported command spec: {type(spec).__name__}")

    def _build_property(self, spec: PropertySpec) -> str:
        parts = [spec.target] if spec.target else []
        props = spec.properties

        if props.intensity is not None:
            parts.append(f"At {format_number(props.intensity)}")
        if props.color is not None:
            parts.append(f"Color {format_color(props.color)}")
        if props.position is not None:
            parts.append(f"Position {format_pan_tilt(props.position)}")
        if props.gobo is not None:
            parts.append(f"Gobo {format_value(props.gobo)}")
        if props.zoom is not None:
            parts.append(f"Zoom {format_number(props.zoom)}")
        if props.focus is not None:
            parts.append(f"Focus {format_number(props.focus)}")
        if props.iris is not None:
            parts.append(f"Iris {format_number(props.iris)}")

        mods = spec.modifiers
        if mods.fade is not None:
            parts.append(f"Fade {format_number(mods.fade)}")
        if mods.delay is not None:
            parts.append(f"Delay {format_number(mods.delay)}")
        if mods.time is not None:
            parts.append(f"Time {format_number(mods.time)}")

        return " ".join(parts)

    def build_sequence(self, specs: Iterable[Any]) -> list[str]:
        """
        Build a sequence of commands.

        A property spec without a target inherits the target of the most
        recent selection spec. Specs that build to an empty string are
        dropped.

        Params:
            specs: CommandSpec models or dicts, in execution order

        Returns:
            Command strings in order
        """
        commands = []
        current_target = None
        for raw in specs:
            spec = parse_spec(raw)
            if isinstance(spec, SelectionSpec):
                current_target = format_selection(spec.object_type, spec.selector)
            elif isinstance(spec, PropertySpec) and spec.target is None and current_target:
                spec = spec.model_copy(update={"target": current_target})
            command = self.build(spec)
            if command:
                commands.append(command)
            else:
                logger.debug("Dropped empty command built from %s spec", spec.kind)
        return commands


_default_builder = CommandBuilder()


def build(spec: Any) -> str:
    """Build one command string with the default builder."""
    return _default_builder.build(spec)


def build_sequence(specs: Iterable[Any]) -> list[str]:
    """Build a command sequence with the default builder."""
    return _default_builder.build_sequence(specs)
