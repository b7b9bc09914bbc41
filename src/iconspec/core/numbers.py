"""Numeric tokenizing, snapping and formatting.

Path data and polyline point lists are opaque strings to the pipeline. The
functions here find the numeric literals inside them, snap them to a grid
and write them back in a canonical form, so that repeated runs over the same
input produce byte-identical strings.

All functions are pure and stateless.
"""

import math
import re
from collections.abc import Callable
from decimal import Decimal

# Signed decimal with optional fraction and exponent. Matches "-7" in "9-7"
# and ".5" in "1.5.5", the way SVG path grammar splits them.
NUMBER_PATTERN = re.compile(r"[-+]?(?:\d*\.\d+|\d+)(?:[eE][-+]?\d+)?")

# Command letters in path data (exponent markers are counted too)
COMMAND_PATTERN = re.compile(r"[a-zA-Z]")

_WHITESPACE = re.compile(r"\s+")

# Decimal point positions outside (-6, 21] switch to exponent form
_EXPONENT_THRESHOLD = 10**21
_MAX_POINT = 21
_MIN_POINT = -6


def format_number(value: float) -> str:
    """Format a number canonically.

    Produces the same text as JavaScript's number-to-string conversion:
    shortest round-trip digits, no insignificant zeros, negative zero as
    "0", and exponent form once the decimal point falls outside
    (-6, 21] digit positions.

    Args:
        value: Number to format

    Returns:
        Canonical text for the number

    Examples:
        >>> format_number(17.0)
        '17'
        >>> format_number(-0.0)
        '0'
        >>> format_number(16.65)
        '16.65'
        >>> format_number(0.00001)
        '0.00001'
        >>> format_number(1e-7)
        '1e-7'
        >>> format_number(1e300)
        '1e+300'
    """
    if value == 0:
        return "0"
    if isinstance(value, int):
        if abs(value) < _EXPONENT_THRESHOLD:
            return str(value)
        try:
            value = float(value)
        except OverflowError:
            return "-Infinity" if value < 0 else "Infinity"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"

    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    text = _layout_digits(digits, len(digits) + exponent)
    return "-" + text if sign else text


def _layout_digits(digits: str, point: int) -> str:
    """Place the decimal point point positions into digits."""
    count = len(digits)
    if count <= point <= _MAX_POINT:
        return digits + "0" * (point - count)
    if 0 < point <= _MAX_POINT:
        return f"{digits[:point]}.{digits[point:]}"
    if _MIN_POINT < point <= 0:
        return "0." + "0" * -point + digits

    power = point - 1
    mantissa = digits if count == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def snap_number(value: float, grid_size: float) -> float:
    """Round value to the nearest multiple of grid_size.

    Halves round up (towards positive infinity), and negative zero is
    normalized to zero. Integral results are returned as int. Values too
    large to scale by the grid are returned unchanged.

    Args:
        value: Number to snap
        grid_size: Grid unit (must be positive)

    Returns:
        Snapped value

    Examples:
        >>> snap_number(16.65, 1)
        17
        >>> snap_number(-0.5, 1)
        0
        >>> snap_number(1.3, 0.5)
        1.5
    """
    scaled = value / grid_size
    if not math.isfinite(scaled):
        return value
    snapped = float(math.floor(scaled + 0.5) * grid_size)
    if not math.isfinite(snapped):
        return value
    if snapped == 0:
        return 0
    if snapped.is_integer() and abs(snapped) < _EXPONENT_THRESHOLD:
        return int(snapped)
    return snapped


def is_grid_multiple(value: float, grid_size: float, epsilon: float = 1e-6) -> bool:
    """Check whether value is a multiple of grid_size within epsilon.

    Non-finite values are never on the grid.
    """
    scaled = value / grid_size
    if not math.isfinite(scaled):
        return False
    return abs(scaled - math.floor(scaled + 0.5)) < epsilon


def extract_numbers(text: str) -> list[float]:
    """Extract every numeric literal from text, in order.

    Args:
        text: Path data, point list or viewBox string

    Returns:
        Parsed values (may include inf for absurd exponents)
    """
    return [float(match) for match in NUMBER_PATTERN.findall(text)]


def rewrite_numbers(text: str, transform: Callable[[float], float]) -> str:
    """Rewrite every numeric literal in text.

    Each literal is parsed, passed through transform and written back with
    format_number. Non-finite literals are left untouched. When a rewritten
    literal would run into a preceding digit or dot ("1.5.5" -> "1.5" "0.5"),
    a single space is inserted so the token boundaries survive.

    Args:
        text: Path data or point list
        transform: Function applied to each parsed value

    Returns:
        Rewritten text
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        value = float(token)
        if not math.isfinite(value):
            return token
        replacement = format_number(transform(value))
        start = match.start()
        if start > 0 and replacement[0] not in "-+":
            previous = text[start - 1]
            if previous.isdigit() or previous == ".":
                replacement = " " + replacement
        return replacement

    return NUMBER_PATTERN.sub(_replace, text)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def count_commands(path_data: str) -> int:
    """Count command letters in path data."""
    return len(COMMAND_PATTERN.findall(path_data))
