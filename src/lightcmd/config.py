"""
Configuration models for the LightCmd pipeline.

The command grammar accepted by a console depends on its software version, so
the keyword tables, numeric limits, named colors and destructive-verb rules
live in `GrammarConfig` rather than in the validators. `DEFAULT_GRAMMAR`
carries the defaults used when a caller passes no grammar.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lightcmd.core.enums import ExecutionMode, SeverityLevel


class DestructiveRule(BaseModel):
    """
    One row of the destructive-command table.

    Params:
        pattern: Regular expression matched case-insensitively at the start of the command
        severity: Severity assigned when the pattern matches
        reason: Human-readable description of what would be lost
    """

    model_config = ConfigDict(frozen=True)

    pattern: str
    severity: SeverityLevel
    reason: str

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"Invalid destructive rule pattern {value!r}: {e}") from e
        return value

    def matches(self, command: str) -> bool:
        return re.match(self.pattern, command, re.IGNORECASE) is not None


DEFAULT_DESTRUCTIVE_RULES = (
    DestructiveRule(
        pattern=r"^\s*delete\s+all\b",
        severity=SeverityLevel.CRITICAL,
        reason="Will permanently delete ALL objects",
    ),
    DestructiveRule(
        pattern=r"^\s*clear\s+all\b",
        severity=SeverityLevel.CRITICAL,
        reason="Will clear ALL current data and selections",
    ),
    DestructiveRule(
        pattern=r"^\s*format\s+\S",
        severity=SeverityLevel.CRITICAL,
        reason="Will format storage device (permanent data loss)",
    ),
    DestructiveRule(
        pattern=r"^\s*delete\s+\S",
        severity=SeverityLevel.HIGH,
        reason="Will permanently delete specified objects",
    ),
    DestructiveRule(
        pattern=r"^\s*clear(\s+selection\b.*)?\s*$",
        severity=SeverityLevel.MEDIUM,
        reason="Will clear current selection",
    ),
    DestructiveRule(
        pattern=r"^\s*off\s+all\b",
        severity=SeverityLevel.MEDIUM,
        reason="Will turn off all active playback",
    ),
    DestructiveRule(
        pattern=r"^\s*blackout\b",
        severity=SeverityLevel.MEDIUM,
        reason="Will blackout all console output",
    ),
    DestructiveRule(
        pattern=r"^\s*update\s+\S",
        severity=SeverityLevel.LOW,
        reason="Will overwrite existing stored data",
    ),
)

DEFAULT_NAMED_COLORS = {
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "magenta": (255, 0, 255),
    "orange": (255, 165, 0),
    "purple": (128, 0, 128),
    "pink": (255, 192, 203),
    "brown": (165, 42, 42),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "amber": (255, 191, 0),
    "lime": (0, 255, 0),
    "indigo": (75, 0, 130),
    "violet": (238, 130, 238),
    "turquoise": (64, 224, 208),
    "navy": (0, 0, 128),
    "maroon": (128, 0, 0),
    "olive": (128, 128, 0),
    "teal": (0, 128, 128),
}

# Inclusive (min, max) per numeric parameter kind
DEFAULT_NUMERIC_RANGES = {
    "intensity": (0.0, 100.0),
    "pan": (-270.0, 270.0),
    "tilt": (-135.0, 135.0),
    "time": (0.0, 3600.0),
    "dmx": (0.0, 255.0),
    "cue": (0.0, 9999.0),
}


class GrammarConfig(BaseModel):
    """
    Keyword tables and limits of the console command language.

    Params:
        selection_keyword: Verb that starts a selection command
        range_keyword: Keyword for inclusive numeric ranges
        property_keywords: Keywords that set a property on the current selection
        timing_keywords: Keywords for trailing timing modifiers
        canonical_keywords: Keywords whose capitalized spelling is canonical
        max_decimal_places: Fractional digits allowed before a precision warning
        max_object_number: Highest object number accepted in a reference
        max_name_length: Longest object name accepted in a reference
        numeric_ranges: Inclusive (min, max) per numeric kind
        named_colors: Lowercase color name to RGB components
        destructive_rules: Ordered destructive-command table, first match wins
    """

    model_config = ConfigDict(frozen=True)

    selection_keyword: str = "Select"
    range_keyword: str = "Thru"
    property_keywords: tuple[str, ...] = (
        "At",
        "Color",
        "Position",
        "Gobo",
        "Zoom",
        "Focus",
        "Iris",
    )
    timing_keywords: tuple[str, ...] = ("Fade", "Delay", "Time")
    canonical_keywords: tuple[str, ...] = (
        "Select",
        "Store",
        "Update",
        "Copy",
        "Move",
        "Delete",
        "Go",
        "Pause",
        "Off",
        "On",
        "Flash",
        "Clear",
        "Blackout",
        "Fixture",
        "Group",
        "Preset",
        "Cue",
        "Sequence",
        "Thru",
        "At",
        "Color",
        "Position",
        "Gobo",
        "Zoom",
        "Focus",
        "Iris",
        "Fade",
        "Delay",
        "Time",
    )
    max_decimal_places: int = Field(default=3, ge=0)
    max_object_number: int = Field(default=9999, ge=1)
    max_name_length: int = Field(default=50, ge=1)
    numeric_ranges: dict[str, tuple[float, float]] = Field(
        default_factory=lambda: dict(DEFAULT_NUMERIC_RANGES)
    )
    named_colors: dict[str, tuple[int, int, int]] = Field(
        default_factory=lambda: dict(DEFAULT_NAMED_COLORS)
    )
    destructive_rules: tuple[DestructiveRule, ...] = DEFAULT_DESTRUCTIVE_RULES

    @field_validator("named_colors")
    @classmethod
    def _lowercase_color_names(
        cls, value: dict[str, tuple[int, int, int]]
    ) -> dict[str, tuple[int, int, int]]:
        return {name.lower(): rgb for name, rgb in value.items()}

    @model_validator(mode="after")
    def _ranges_complete(self) -> "GrammarConfig":
        missing = set(DEFAULT_NUMERIC_RANGES) - set(self.numeric_ranges)
        if missing:
            raise ValueError(f"numeric_ranges is missing kinds: {sorted(missing)}")
        for kind, (low, high) in self.numeric_ranges.items():
            if low > high:
                raise ValueError(f"numeric range for {kind} has min > max")
        return self

    @property
    def clause_keywords(self) -> tuple[str, ...]:
        """Property and timing keywords, in clause order."""
        return self.property_keywords + self.timing_keywords

    def is_clause_keyword(self, token: str, case_sensitive: bool = True) -> bool:
        if case_sensitive:
            return token in self.clause_keywords
        return token.lower() in {k.lower() for k in self.clause_keywords}


DEFAULT_GRAMMAR = GrammarConfig()


class DispatcherConfig(BaseModel):
    """
    Execution policy of a `CommandDispatcher`.

    Params:
        max_attempts: Host calls per command before giving up (1 means no retry)
        check_safety: Run the safety classifier before executing
        require_confirmation: Hold destructive commands until confirmed
        confirmation_threshold: Lowest severity that needs confirmation
        check_parameters: Also validate intensity, color and fixture values
        halt_on_failure: Stop a batch at the first unsuccessful command
        mode: Host primitive used for execution
        timeout_seconds: Best-effort bound on one attempt's wall-clock time
        optimize_batches: Merge selections and property commands before a batch runs
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=1, ge=1)
    check_safety: bool = True
    require_confirmation: bool = True
    confirmation_threshold: SeverityLevel = SeverityLevel.LOW
    check_parameters: bool = False
    halt_on_failure: bool = True
    mode: ExecutionMode = ExecutionMode.SYNC
    timeout_seconds: float | None = Field(default=None, gt=0)
    optimize_batches: bool = False
