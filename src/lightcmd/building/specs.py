"""
Structured command specifications.

`CommandSpec` is a discriminated union over the `kind` field, so specs can be
written as model instances or parsed from plain dictionaries with
`parse_spec`. Specs are frozen and consumed once by the builder.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ObjectRange(BaseModel):
    """Inclusive object number range rendered as `start Thru end`."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int


SelectorItem = int | str | ObjectRange | tuple[int, int]
Selector = int | str | ObjectRange | tuple[int, int] | list[SelectorItem]


class PanTilt(BaseModel):
    """Pan and tilt in degrees."""

    model_config = ConfigDict(frozen=True)

    pan: int | float
    tilt: int | float


class PropertyValues(BaseModel):
    """Property values of a property-setting command; unset fields are omitted."""

    model_config = ConfigDict(frozen=True)

    intensity: int | float | None = None
    color: str | tuple[int, int, int] | None = None
    position: PanTilt | None = None
    gobo: int | str | None = None
    zoom: int | float | None = None
    focus: int | float | None = None
    iris: int | float | None = None


class TimingModifiers(BaseModel):
    """Trailing timing modifiers in seconds."""

    model_config = ConfigDict(frozen=True)

    fade: int | float | None = None
    delay: int | float | None = None
    time: int | float | None = None


OptionValue = int | float | bool | str


class SelectionSpec(BaseModel):
    """`Select <object_type> <selector>`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["selection"] = "selection"
    object_type: str
    selector: Selector


class PropertySpec(BaseModel):
    """`<target> At ... Fade ...`; without a target only the clauses are built."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["property"] = "property"
    target: str | None = None
    properties: PropertyValues = PropertyValues()
    modifiers: TimingModifiers = TimingModifiers()


class StorageSpec(BaseModel):
    """`<action> <target> [<key> <value>]*` for Store, Update, Copy, Move, Delete."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["storage"] = "storage"
    action: str
    target: str
    options: dict[str, OptionValue] = Field(default_factory=dict)


class PlaybackSpec(BaseModel):
    """`<action> <target> [<key> <value>]*` for Go, Pause, Off, On, Flash."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["playback"] = "playback"
    action: str
    target: str
    options: dict[str, OptionValue] = Field(default_factory=dict)


class CustomSpec(BaseModel):
    """A raw command passed through unmodified."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    raw: str


CommandSpec = Annotated[
    Union[SelectionSpec, PropertySpec, StorageSpec, PlaybackSpec, CustomSpec],
    Field(discriminator="kind"),
]

SPEC_TYPES = (SelectionSpec, PropertySpec, StorageSpec, PlaybackSpec, CustomSpec)

_spec_adapter: TypeAdapter = TypeAdapter(CommandSpec)


def parse_spec(data: Any) -> BaseModel:
    """
    Parse a command spec from a dictionary.

    Params:
        data: Spec model instance, or a dict with a `kind` key

    Returns:
        The matching spec model

    Raises:
        pydantic.ValidationError: If the data does not describe a valid spec
    """
    if isinstance(data, SPEC_TYPES):
        return data
    return _spec_adapter.validate_python(data)
