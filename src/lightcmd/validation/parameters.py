"""
Validation and coercion of individual command values.

This module validates numeric values against per-kind ranges, object
references against the reference grammar and colors against the supported
color notations. Every validator is pure and returns `Ok` with the coerced
value or `Err` with a structured error; none of them raise.
"""

import re
from enum import Enum

from attrs import field, frozen

from lightcmd.config import DEFAULT_GRAMMAR, GrammarConfig
from lightcmd.core.numbers import format_number, parse_number
from lightcmd.core.result import ErrorCode, Ok, Result, fail
from lightcmd.core.types import ParamValue


class ParameterKind(Enum):
    """Kind of value a command parameter holds."""

    INTENSITY = "intensity"
    POSITION = "position"
    TIME = "time"
    DMX = "dmx"
    CUE = "cue"
    COLOR = "color"
    OBJECT_REFERENCE = "object_reference"


class PositionAxis(Enum):
    """Axis of a position value."""

    PAN = "pan"
    TILT = "tilt"


NUMERIC_KINDS = frozenset(
    {
        ParameterKind.INTENSITY,
        ParameterKind.POSITION,
        ParameterKind.TIME,
        ParameterKind.DMX,
        ParameterKind.CUE,
    }
)


@frozen
class ParameterConstraints:
    """
    Optional restrictions on a parameter value.

    Params:
        min: Inclusive lower bound for numbers
        max: Inclusive upper bound for numbers
        pattern: Regular expression the value's text must fully match
        allowed_values: Exhaustive set of accepted values
        kind: Parameter kind whose built-in rules apply before the bounds
        axis: Axis used when kind is POSITION
    """

    min: float | None = None
    max: float | None = None
    pattern: str | None = None
    allowed_values: tuple[ParamValue, ...] | None = field(
        default=None, converter=lambda v: tuple(v) if v is not None else None
    )
    kind: ParameterKind | None = None
    axis: PositionAxis = PositionAxis.PAN


@frozen
class ParameterSpec:
    """Kind and constraints declared for one validation call."""

    kind: ParameterKind
    constraints: ParameterConstraints | None = None


@frozen
class SingleReference:
    """One object number, e.g. `5`."""

    number: int

    def __str__(self) -> str:
        return str(self.number)


@frozen
class RangeReference:
    """Inclusive number range, e.g. `1 Thru 10`."""

    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start} Thru {self.end}"


@frozen
class MultiReference:
    """Several object numbers, e.g. `1 + 2 + 5`."""

    numbers: tuple[int, ...] = field(converter=tuple)

    def __str__(self) -> str:
        return " + ".join(str(n) for n in self.numbers)


@frozen
class NameReference:
    """Object referenced by name, quoted or bare."""

    name: str
    quoted: bool = False

    def __str__(self) -> str:
        return f'"{self.name}"' if self.quoted else self.name


ReferenceShape = SingleReference | RangeReference | MultiReference | NameReference


class ColorFormat(Enum):
    """Notation a color value was written in."""

    HEX = "hex"
    RGB = "rgb"
    NAMED = "named"


@frozen
class ColorValue:
    """A validated color with its RGB components."""

    format: ColorFormat
    red: int
    green: int
    blue: int
    text: str

    @property
    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)


SINGLE_PATTERN = re.compile(r"^\d+$")
MULTI_PATTERN = re.compile(r"^\d+(?:\s*\+\s*\d+)+$")
QUOTED_NAME_PATTERN = re.compile(r'^"([^"]*)"$')
BARE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")
HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]+)$")
RGB_PATTERN = re.compile(r"^(\d+)\s*,\s*(\d+)\s*,\s*(\d+)$")


def _range_message(kind: ParameterKind, axis: PositionAxis, low: str, high: str) -> str:
    if kind is ParameterKind.INTENSITY:
        return f"Intensity must be between {low} and {high}"
    if kind is ParameterKind.POSITION:
        label = "Pan" if axis is PositionAxis.PAN else "Tilt"
        return f"{label} position must be between {low} and {high} degrees"
    if kind is ParameterKind.DMX:
        return f"DMX value must be between {low} and {high}"
    if kind is ParameterKind.CUE:
        return f"Cue number must be between {low} and {high}"
    return f"Time value must be between {low} and {high} seconds"


def _range_key(kind: ParameterKind, axis: PositionAxis) -> str:
    if kind is ParameterKind.POSITION:
        return axis.value
    return kind.value


def validate_numeric(
    value: ParamValue,
    kind: ParameterKind,
    axis: PositionAxis = PositionAxis.PAN,
    grammar: GrammarConfig | None = None,
) -> Result[int | float]:
    """
    Validate a numeric value against the range of its kind.

    Params:
        value: Number or numeric text
        kind: Numeric parameter kind
        axis: Pan or tilt, used when kind is POSITION
        grammar: Grammar supplying the ranges (defaults to DEFAULT_GRAMMAR)

    Returns:
        Ok with the parsed number, or Err with NOT_NUMERIC, OUT_OF_RANGE or
        UNSUPPORTED_KIND
    """
    grammar = grammar or DEFAULT_GRAMMAR
    subject = str(value)
    if kind not in NUMERIC_KINDS:
        return fail(
            ErrorCode.UNSUPPORTED_KIND,
            f"{kind.value} is not a numeric parameter kind",
            subject=subject,
        )

    number = parse_number(value)
    if number is None:
        return fail(
            ErrorCode.NOT_NUMERIC,
            f"Invalid numeric value: {value}",
            "Use a plain decimal number such as 50 or 2.5",
            subject,
        )

    low, high = grammar.numeric_ranges[_range_key(kind, axis)]
    if low <= number <= high:
        return Ok(number)

    low_text, high_text = format_number(low), format_number(high)
    if kind is ParameterKind.TIME and number < low and low == 0:
        message = "Time value cannot be negative"
    elif kind is ParameterKind.TIME and number > high:
        message = f"Time value exceeds reasonable limit ({high_text} seconds)"
    else:
        message = _range_message(kind, axis, low_text, high_text)
    return fail(
        ErrorCode.OUT_OF_RANGE,
        message,
        f"Use a value between {low_text} and {high_text}",
        subject,
    )


def validate_object_reference(
    text: str | None, grammar: GrammarConfig | None = None
) -> Result[ReferenceShape]:
    """
    Validate an object reference and classify its shape.

    Shapes are tried in order and the first matching shape decides the
    outcome: a single number, a `Thru` range, a `+` multi-selection, a quoted
    name and finally a bare name.

    Params:
        text: Reference text, e.g. "5", "1 Thru 10", "1 + 2", '"Front Wash"'
        grammar: Grammar supplying limits and the range keyword

    Returns:
        Ok with the ReferenceShape, or Err describing the violation
    """
    grammar = grammar or DEFAULT_GRAMMAR
    limit = grammar.max_object_number
    max_length = grammar.max_name_length

    if text is None or not text.strip():
        return fail(
            ErrorCode.INVALID_REFERENCE_FORMAT,
            "Object reference cannot be empty",
            subject=text or "",
        )
    trimmed = text.strip()

    if SINGLE_PATTERN.match(trimmed):
        number = int(trimmed)
        if number < 1:
            return fail(
                ErrorCode.OUT_OF_RANGE, "Object numbers must be positive", subject=trimmed
            )
        if number > limit:
            return fail(
                ErrorCode.OUT_OF_RANGE,
                f"Object number exceeds reasonable limit ({limit})",
                subject=trimmed,
            )
        return Ok(SingleReference(number))

    range_pattern = re.compile(
        rf"^(\d+)\s+{re.escape(grammar.range_keyword)}\s+(\d+)$", re.IGNORECASE
    )
    range_match = range_pattern.match(trimmed)
    if range_match:
        start, end = int(range_match.group(1)), int(range_match.group(2))
        if start >= end:
            return fail(
                ErrorCode.RANGE_ORDER,
                "Range start must be less than range end",
                f"Write the range as '{min(start, end)} {grammar.range_keyword} {max(start, end)}'",
                trimmed,
            )
        if start < 1 or end > limit:
            return fail(
                ErrorCode.OUT_OF_RANGE,
                f"Range values must be between 1 and {limit}",
                subject=trimmed,
            )
        return Ok(RangeReference(start, end))

    if MULTI_PATTERN.match(trimmed):
        numbers = [int(n) for n in re.findall(r"\d+", trimmed)]
        if any(n < 1 or n > limit for n in numbers):
            return fail(
                ErrorCode.OUT_OF_RANGE,
                f"Selection numbers must be between 1 and {limit}",
                subject=trimmed,
            )
        return Ok(MultiReference(numbers))

    quoted = QUOTED_NAME_PATTERN.match(trimmed)
    if quoted:
        name = quoted.group(1)
        if not name:
            return fail(
                ErrorCode.INVALID_REFERENCE_FORMAT,
                "Object name cannot be empty",
                subject=trimmed,
            )
        if len(name) > max_length:
            return fail(
                ErrorCode.NAME_TOO_LONG,
                f"Object name exceeds maximum length ({max_length} characters)",
                subject=trimmed,
            )
        return Ok(NameReference(name, quoted=True))

    if BARE_NAME_PATTERN.match(trimmed):
        if len(trimmed) > max_length:
            return fail(
                ErrorCode.NAME_TOO_LONG,
                f"Object name exceeds maximum length ({max_length} characters)",
                subject=trimmed,
            )
        return Ok(NameReference(trimmed))

    return fail(
        ErrorCode.INVALID_REFERENCE_FORMAT,
        "Invalid object reference format",
        'Use a number, a range like "1 Thru 10", a list like "1 + 2" or a name',
        trimmed,
    )


def validate_color(
    text: str | None, grammar: GrammarConfig | None = None
) -> Result[ColorValue]:
    """
    Validate a color value.

    Accepts `#RGB` / `#RRGGBB` hex, `r,g,b` components and named colors
    (case-insensitive). A value wrapped in double quotes is unwrapped first,
    since builders quote hex colors.

    Params:
        text: Color text
        grammar: Grammar supplying the named colors

    Returns:
        Ok with a ColorValue, or Err with INVALID_COLOR_FORMAT
    """
    grammar = grammar or DEFAULT_GRAMMAR
    if text is None or not text.strip():
        return fail(
            ErrorCode.INVALID_COLOR_FORMAT, "Color value cannot be empty", subject=""
        )
    trimmed = text.strip()
    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] == '"':
        trimmed = trimmed[1:-1].strip()

    hex_match = HEX_PATTERN.match(trimmed)
    if hex_match:
        digits = hex_match.group(1)
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        elif len(digits) != 6:
            return fail(
                ErrorCode.INVALID_COLOR_FORMAT,
                "Hex color must be #RGB or #RRGGBB format",
                subject=trimmed,
            )
        red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return Ok(ColorValue(ColorFormat.HEX, red, green, blue, trimmed))

    rgb_match = RGB_PATTERN.match(trimmed)
    if rgb_match:
        red, green, blue = (int(c) for c in rgb_match.groups())
        if max(red, green, blue) > 255:
            return fail(
                ErrorCode.INVALID_COLOR_FORMAT,
                "RGB values must be between 0 and 255",
                subject=trimmed,
            )
        return Ok(ColorValue(ColorFormat.RGB, red, green, blue, trimmed))

    rgb = grammar.named_colors.get(trimmed.lower())
    if rgb is not None:
        return Ok(ColorValue(ColorFormat.NAMED, *rgb, trimmed))

    return fail(
        ErrorCode.INVALID_COLOR_FORMAT,
        "Invalid color format. Use hex (#FF0000), RGB (255,0,0), or color name",
        subject=trimmed,
    )


def check_constraints(
    value: ParamValue,
    constraints: ParameterConstraints,
    label: str = "Value",
) -> Result[ParamValue]:
    """
    Apply min/max/pattern/allowed_values constraints to a coerced value.

    Params:
        value: Already coerced value
        constraints: Constraints to apply
        label: How to name the value in error messages

    Returns:
        Ok with the unchanged value, or Err with OUT_OF_RANGE,
        PATTERN_MISMATCH or NOT_ALLOWED
    """
    number = None if isinstance(value, str) else parse_number(value)
    subject = str(value)

    if number is not None:
        if constraints.min is not None and number < constraints.min:
            return fail(
                ErrorCode.OUT_OF_RANGE,
                f"{label} must be at least {format_number(constraints.min)}",
                subject=subject,
            )
        if constraints.max is not None and number > constraints.max:
            return fail(
                ErrorCode.OUT_OF_RANGE,
                f"{label} must be at most {format_number(constraints.max)}",
                subject=subject,
            )

    if constraints.pattern is not None:
        text = format_number(number) if number is not None else str(value)
        if re.fullmatch(constraints.pattern, text) is None:
            return fail(
                ErrorCode.PATTERN_MISMATCH,
                f"{label} does not match pattern {constraints.pattern!r}",
                subject=subject,
            )

    if constraints.allowed_values is not None and value not in constraints.allowed_values:
        allowed = ", ".join(str(v) for v in constraints.allowed_values)
        return fail(
            ErrorCode.NOT_ALLOWED,
            f"{label} must be one of: {allowed}",
            subject=subject,
        )

    return Ok(value)


def validate_parameter(
    value: ParamValue,
    spec: ParameterSpec,
    grammar: GrammarConfig | None = None,
) -> Result:
    """
    Validate a value against a ParameterSpec.

    The kind's built-in rules run first, then any constraints.

    Params:
        value: Raw value
        spec: Kind and optional constraints
        grammar: Grammar supplying limits

    Returns:
        Ok with the coerced value (number, ReferenceShape or ColorValue), or Err
    """
    constraints = spec.constraints or ParameterConstraints()

    if spec.kind in NUMERIC_KINDS:
        result = validate_numeric(value, spec.kind, constraints.axis, grammar)
        if result.is_err:
            return result
        checked = check_constraints(result.value, constraints)
        return checked if checked.is_err else result

    if isinstance(value, bool):
        return fail(
            ErrorCode.UNSUPPORTED_KIND,
            f"Boolean value is not a valid {spec.kind.value}",
            subject=str(value),
        )

    if spec.kind is ParameterKind.COLOR:
        if not isinstance(value, str):
            return fail(
                ErrorCode.INVALID_COLOR_FORMAT,
                "Color value must be text",
                subject=str(value),
            )
        result = validate_color(value, grammar)
    else:
        result = validate_object_reference(
            value if isinstance(value, str) else str(value), grammar
        )
    if result.is_err:
        return result
    checked = check_constraints(value, constraints)
    return checked if checked.is_err else result
