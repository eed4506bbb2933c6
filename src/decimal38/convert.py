"""
convert.py — Conversions between Parts and Python's int / float

Integers convert exactly in both directions (subject to the 38-digit budget
and, on the way out, an optional bit width).

Floats are the lossy side:
- from a float, the default is the shortest repr() text, so 0.1 becomes
  0.1 and not 0.1000000000000000055511151231257827; exact=True expands
  the binary value digit for digit instead.
- to a float, the plain text is handed to float(), which rounds correctly
  to nearest. single=True then narrows to IEEE-754 binary32.
"""

from __future__ import annotations
import logging
import math
import struct

from .arithmetic import round_to_scale
from .config import DEFAULT_ROUNDING, MAX_MAGNITUDE, MAX_PRECISION, MAX_SCALE
from .errors import DecimalOverflow, DecimalSyntaxError, PrecisionOverflow
from .formatter import format_plain
from .parser import parse_parts
from .rounding import Parts, RoundingMode, ZERO_PARTS, pow10, strip_trailing_zeros

logger = logging.getLogger(__name__)


# ==============================================================================
# INTEGERS
# ==============================================================================

def parts_from_int(value: int) -> Parts:
    """
    Exact conversion of an int (bool included) with scale 0.

    Raises:
        TypeError: if value is not an int
        PrecisionOverflow: if |value| has more than 38 digits
    """
    if not isinstance(value, int):
        raise TypeError(f"Expected int, got {type(value).__name__}")

    magnitude = abs(int(value))
    if magnitude > MAX_MAGNITUDE:
        raise PrecisionOverflow(f"integer has more than {MAX_PRECISION} digits")
    if magnitude == 0:
        return ZERO_PARTS
    return Parts(value < 0, magnitude, 0)


def truncate_to_int(parts: Parts) -> int:
    """Integer part, truncated toward zero."""
    negative, magnitude, scale = parts
    whole = magnitude // pow10(scale)
    return -whole if negative else whole


def to_int(
    parts: Parts,
    bits: int | None = None,
    signed: bool = True,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> int:
    """
    Round to an integer and check it against a fixed-width target.

    Args:
        parts: the value
        bits: width of the target integer type (8, 16, 32, 64, 128...),
            or None for an unbounded Python int
        signed: two's complement range when True, 0..2**bits - 1 otherwise
        rounding: how the fractional part is rounded away

    Raises:
        DecimalOverflow: if the rounded value does not fit the target
    """
    rounded = round_to_scale(parts, 0, rounding)
    value = -rounded.magnitude if rounded.negative else rounded.magnitude

    if bits is None:
        if not signed and value < 0:
            raise DecimalOverflow(f"{value} does not fit an unsigned integer")
        return value

    if bits <= 0:
        raise ValueError(f"bits must be > 0, got {bits}")

    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1

    if not low <= value <= high:
        kind = "signed" if signed else "unsigned"
        raise DecimalOverflow(f"{value} does not fit a {kind} {bits}-bit integer")
    return value


# ==============================================================================
# FLOATS
# ==============================================================================

def parts_from_float(value: float, exact: bool = False) -> Parts:
    """
    Convert a float.

    Args:
        value: a finite float
        exact: expand the binary value exactly instead of using its
            shortest round-tripping repr()

    Trailing fractional zeros are dropped, so 100.0 becomes 100.

    Raises:
        DecimalSyntaxError: for NaN
        DecimalOverflow: for +/- infinity
        PrecisionOverflow: if the decimal form needs more than 38 digits
            or a scale above 38
    """
    if not isinstance(value, (int, float)):
        raise TypeError(f"Expected float, got {type(value).__name__}")

    value = float(value)
    if math.isnan(value):
        raise DecimalSyntaxError("cannot convert NaN to a decimal")
    if math.isinf(value):
        raise DecimalOverflow("cannot convert infinity to a decimal")
    if value == 0:
        return ZERO_PARTS

    if not exact:
        text = repr(value)
        logger.debug("converting float %s through its shortest repr", text)
        parts = parse_parts(text)
        magnitude, scale = strip_trailing_zeros(parts.magnitude, parts.scale)
        return Parts(parts.negative, magnitude, scale)

    numerator, denominator = value.as_integer_ratio()
    # denominator is 2**k, and n / 2**k == n * 5**k / 10**k
    k = denominator.bit_length() - 1
    magnitude, scale = strip_trailing_zeros(abs(numerator) * 5 ** k, k)
    logger.debug("expanded float %r to %d fractional digit(s)", value, scale)

    if magnitude > MAX_MAGNITUDE or scale > MAX_SCALE:
        raise PrecisionOverflow(
            f"exact expansion of {value!r} needs more than {MAX_PRECISION} digits"
        )
    return Parts(value < 0, magnitude, scale)


def to_float(parts: Parts, single: bool = False) -> float:
    """
    Nearest binary64 (or binary32 when single=True) to the value.

    Raises:
        DecimalOverflow: if the value is outside the binary32 range
    """
    result = float(format_plain(parts))
    if not single:
        return result

    try:
        (narrowed,) = struct.unpack("<f", struct.pack("<f", result))
    except OverflowError as exc:
        raise DecimalOverflow(f"{result!r} is outside the float32 range") from exc

    logger.debug("narrowed %r to float32 %r", result, narrowed)
    return narrowed
