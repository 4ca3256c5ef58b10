"""
Formatting of values and selections for command strings.
"""

import math
import re
from collections.abc import Sequence
from enum import Enum

from lightcmd.building.specs import ObjectRange, PanTilt, Selector, SelectorItem
from lightcmd.core.numbers import format_number
from lightcmd.validation.parameters import ColorValue

RANGE_KEYWORD = "Thru"

# Characters that force a name or color into double quotes
SPECIAL_CHARACTERS = re.compile(r"[\s+\-*/@!#$%^&()]")
COLOR_SPECIAL_CHARACTERS = re.compile(r"[\s+\-*/@]")
BARE_NAME = re.compile(r"^[A-Za-z0-9_.\-]+$")
NUMERIC_REFERENCE = re.compile(rf"^\d+(?:\s+{RANGE_KEYWORD}\s+\d+)?$", re.IGNORECASE)


class IntensityFormat(Enum):
    PERCENT = "percent"
    DECIMAL = "decimal"
    DMX = "dmx"


class PositionFormat(Enum):
    DEGREES = "degrees"
    PERCENT = "percent"
    DMX = "dmx"


class TimeFormat(Enum):
    SECONDS = "seconds"
    FRAMES = "frames"
    BEATS = "beats"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def format_value(value: int | float | bool | str) -> str:
    """Render an option or property value."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def format_intensity(
    intensity: int | float, format: IntensityFormat = IntensityFormat.PERCENT
) -> str:
    """
    Format an intensity given in percent.

    Params:
        intensity: Intensity in percent (DECIMAL expects a 0-1 fraction)
        format: PERCENT "75", DECIMAL "0.75" or DMX "191"

    Returns:
        Clamped, formatted intensity
    """
    if format is IntensityFormat.DECIMAL:
        return f"{_clamp(intensity, 0, 1):.2f}"
    if format is IntensityFormat.DMX:
        return str(int(_clamp(math.floor(intensity / 100 * 255), 0, 255)))
    return format_number(_clamp(intensity, 0, 100))


def format_color(color: str | tuple[int, int, int] | ColorValue) -> str:
    """
    Format a color for a `Color` clause.

    Hex colors and names containing operators or spaces are quoted; RGB
    components are joined with commas.

    Params:
        color: Color name, hex string, (r, g, b) tuple or ColorValue

    Returns:
        Color text
    """
    if isinstance(color, ColorValue):
        return ",".join(str(c) for c in color.rgb)
    if isinstance(color, tuple):
        return ",".join(str(c) for c in color)
    if color.startswith("#") or COLOR_SPECIAL_CHARACTERS.search(color):
        return f'"{color}"'
    return color


def format_position(
    pan: int | float,
    tilt: int | float,
    format: PositionFormat = PositionFormat.DEGREES,
) -> tuple[str, str]:
    """
    Format pan and tilt.

    Percent and DMX conversions assume the full -270..270 pan and
    -135..135 tilt ranges.

    Params:
        pan: Pan in degrees
        tilt: Tilt in degrees
        format: DEGREES, PERCENT or DMX

    Returns:
        (pan text, tilt text)
    """
    if format is PositionFormat.PERCENT:
        pan_percent = (pan + 270) / 540 * 100
        tilt_percent = (tilt + 135) / 270 * 100
        return f"{pan_percent:.1f}", f"{tilt_percent:.1f}"
    if format is PositionFormat.DMX:
        pan_dmx = math.floor((pan + 270) / 540 * 255)
        tilt_dmx = math.floor((tilt + 135) / 270 * 255)
        return str(pan_dmx), str(tilt_dmx)
    return format_number(pan), format_number(tilt)


def format_time(
    seconds: int | float, format: TimeFormat = TimeFormat.SECONDS, fps: int = 24
) -> str:
    """
    Format a time value.

    Params:
        seconds: Time in seconds
        format: SECONDS "3.5", FRAMES "84" (at fps) or BEATS "3.50"
        fps: Frame rate for FRAMES

    Returns:
        Formatted time
    """
    if format is TimeFormat.FRAMES:
        return str(math.floor(seconds * fps))
    if format is TimeFormat.BEATS:
        return f"{seconds:.2f}"
    return format_number(seconds)


def escape_command_string(text: str | None) -> str:
    """
    Make a name safe to embed in a command.

    Embedded quotes are backslash-escaped and the result is wrapped in
    quotes when it contains spaces or operator characters.

    Params:
        text: Raw name

    Returns:
        Escaped name
    """
    if not text:
        return ""
    escaped = text.replace('"', '\\"')
    if SPECIAL_CHARACTERS.search(escaped):
        return f'"{escaped}"'
    return escaped


def _format_item(item: SelectorItem) -> str:
    if isinstance(item, ObjectRange):
        return f"{item.start} {RANGE_KEYWORD} {item.end}"
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return f"{item[0]} {RANGE_KEYWORD} {item[1]}"
    if isinstance(item, str):
        if item.startswith('"') or BARE_NAME.match(item) or NUMERIC_REFERENCE.match(item):
            return item
        return f'"{item}"'
    return str(item)


def format_selector(selector: Selector) -> str:
    """
    Format a selector.

    Params:
        selector: Index, text, (start, end) range, ObjectRange, or a list of
            indices, names and [start, end] pairs

    Returns:
        Selector text, list items joined with " + "
    """
    if isinstance(selector, str):
        return selector
    if isinstance(selector, (int, ObjectRange, tuple)):
        return _format_item(selector)
    return " + ".join(_format_item(item) for item in selector)


def format_selection(object_type: str, selector: Selector) -> str:
    """Format `<object_type> <selector>`, e.g. "Fixture 1 Thru 10"."""
    return f"{object_type} {format_selector(selector)}"


def build_mixed_selection(objects: Sequence[tuple[str, Selector]]) -> str:
    """
    Combine selections of different object types.

    Params:
        objects: (object_type, selector) pairs

    Returns:
        e.g. 'Fixture 1 Thru 10 + Group "Front Wash"'
    """
    return " + ".join(
        format_selection(object_type, selector) for object_type, selector in objects
    )


def format_pan_tilt(position: PanTilt) -> str:
    pan, tilt = format_position(position.pan, position.tilt)
    return f"{pan} {tilt}"
