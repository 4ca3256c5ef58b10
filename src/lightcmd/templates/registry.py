"""
Registry of named command templates and the predefined template set.
"""

from collections.abc import Mapping

from attrs import evolve

from lightcmd.config import GrammarConfig
from lightcmd.core.result import Result
from lightcmd.core.types import ParamValue
from lightcmd.exceptions import DuplicateTemplateError, TemplateNotFoundError
from lightcmd.templates.engine import CommandTemplate, ParamType
from lightcmd.validation.parameters import (
    ParameterConstraints,
    ParameterKind,
    PositionAxis,
)


class TemplateRegistry:
    """Name -> `CommandTemplate` lookup.

    Responsibilities:
      - Hold templates created once at registration time and reused afterwards.
      - Reject accidental re-registration; overwriting is explicit via `set_template`.
      - Generate commands by template name.

    Notes:
      - Templates are immutable, so a registry can hand out the same instance freely.
    """

    def __init__(self, templates: Mapping[str, CommandTemplate] | None = None):
        self._templates: dict[str, CommandTemplate] = {}
        for name, template in (templates or {}).items():
            self.set_template(name, template)

    def get_template(self, name: str) -> CommandTemplate:
        """Get a template by its registered name.

        Params:
            name: Registered template name.

        Returns:
            The CommandTemplate.

        Raises:
            TemplateNotFoundError: If the name is not registered.
        """
        if name not in self._templates:
            raise TemplateNotFoundError(name, self.list_templates())
        return self._templates[name]

    def list_templates(self) -> list[str]:
        """List all registered template names in registration order."""
        return list(self._templates.keys())

    def register_template(self, name: str, template: CommandTemplate) -> CommandTemplate:
        """Register a new template.

        Params:
            name: Template name.
            template: Template to store; its `name` is filled in when unset.

        Returns:
            The stored template.

        Raises:
            DuplicateTemplateError: If the name is already registered.
        """
        if name in self._templates:
            raise DuplicateTemplateError(name)
        return self.set_template(name, template)

    def update_template(self, name: str, template: CommandTemplate) -> CommandTemplate:
        """Replace an existing template.

        Raises:
            TemplateNotFoundError: If the name is not registered.
        """
        if name not in self._templates:
            raise TemplateNotFoundError(name, self.list_templates())
        return self.set_template(name, template)

    def set_template(self, name: str, template: CommandTemplate) -> CommandTemplate:
        """Insert a new template or overwrite an existing one."""
        if template.name is None:
            template = evolve(template, name=name)
        self._templates[name] = template
        return template

    def generate(
        self,
        name: str,
        values: Mapping[str, ParamValue],
        grammar: GrammarConfig | None = None,
    ) -> Result[str]:
        """Generate a command from a registered template.

        Raises:
            TemplateNotFoundError: If the name is not registered.
        """
        return self.get_template(name).generate(values, grammar)

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)


PREDEFINED_TEMPLATES = {
    # Selection
    "select_fixtures": CommandTemplate(
        "Select Fixture {fixtures}",
        {"fixtures": ParamType.TEXT},
    ),
    "select_groups": CommandTemplate(
        "Select Group {groups}",
        {"groups": ParamType.TEXT},
    ),
    # Properties
    "set_intensity": CommandTemplate(
        "{target} At {intensity}",
        {"target": ParamType.TEXT, "intensity": ParamType.NUMBER},
        {"intensity": ParameterConstraints(min=0, max=100)},
    ),
    "set_color": CommandTemplate(
        "{target} Color {color}",
        {"target": ParamType.TEXT, "color": ParamType.TEXT},
        {"color": ParameterConstraints(kind=ParameterKind.COLOR)},
    ),
    "set_position": CommandTemplate(
        "{target} Position {pan} {tilt}",
        {"target": ParamType.TEXT, "pan": ParamType.NUMBER, "tilt": ParamType.NUMBER},
        {
            "pan": ParameterConstraints(min=-270, max=270),
            "tilt": ParameterConstraints(
                min=-135, max=135, kind=ParameterKind.POSITION, axis=PositionAxis.TILT
            ),
        },
    ),
    # Storage
    "store_cue": CommandTemplate("Store Cue {cue}", {"cue": ParamType.TEXT}),
    "store_group": CommandTemplate("Store Group {group}", {"group": ParamType.TEXT}),
    # Playback
    "go_cue": CommandTemplate("Go Cue {cue}", {"cue": ParamType.TEXT}),
    "pause_sequence": CommandTemplate(
        "Pause Sequence {sequence}", {"sequence": ParamType.TEXT}
    ),
}

default_registry = TemplateRegistry(PREDEFINED_TEMPLATES)


def get_command_template(name: str) -> CommandTemplate | None:
    """
    Get a predefined template by name.

    Params:
        name: Template name, e.g. "set_intensity"

    Returns:
        The template, or None when no such template exists
    """
    if name not in default_registry:
        return None
    return default_registry.get_template(name)
