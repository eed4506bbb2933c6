"""
parser.py — Text to (sign, magnitude, scale)

================================================================================
GRAMMAR
================================================================================

    [ws] [+|-] digits [ '.' [digits] ] [ (e|E) [+|-] digits ] [ws]
    [ws] [+|-] '.' digits              [ (e|E) [+|-] digits ] [ws]

- Surrounding ASCII whitespace is trimmed; nothing else is tolerated.
- Only ASCII digits are accepted (no Unicode digits, no underscores).
- Trailing fractional zeros are significant: "1.50" has scale 2, so that
  parse(format(x)) reproduces x exactly.

================================================================================
PRECISION POLICY
================================================================================

The parser never rounds. Zeros that carry no value (leading zeros, trailing
fractional zeros) are dropped only when needed to fit the 38-digit budget;
anything else that does not fit raises PrecisionOverflow.

================================================================================
"""

from __future__ import annotations
import re

from .config import MAX_EXPONENT_DIGITS, MAX_PRECISION, MAX_SCALE
from .errors import DecimalSyntaxError, PrecisionOverflow
from .rounding import Parts, ZERO_PARTS, pow10


_ASCII_WHITESPACE = " \t\n\r\x0b\x0c"

_NUMBER = re.compile(
    r"""
    (?P<sign>[+-])?
    (?:
        (?P<integral>[0-9]+)(?:\.(?P<fractional>[0-9]*))?
      |
        \.(?P<fractional_only>[0-9]+)
    )
    (?:[eE](?P<exponent>[+-]?[0-9]+))?
    """,
    re.VERBOSE,
)


def _parse_exponent(exponent_text: str | None, text: str) -> int:
    if exponent_text is None:
        return 0

    sign = -1 if exponent_text.startswith("-") else 1
    significant = exponent_text.lstrip("+-").lstrip("0")
    if len(significant) > MAX_EXPONENT_DIGITS:
        raise PrecisionOverflow(f"exponent out of range: {text!r}")

    return sign * int(significant or "0")


def parse_parts(text: str) -> Parts:
    """
    Parse decimal text into Parts.

    Raises:
        TypeError: if text is not a str
        DecimalSyntaxError: if text does not match the grammar
        PrecisionOverflow: if the value needs more than 38 digits or a
            scale above 38
    """
    if not isinstance(text, str):
        raise TypeError(f"Cannot parse a decimal from {type(text).__name__}")

    stripped = text.strip(_ASCII_WHITESPACE)
    if not stripped:
        raise DecimalSyntaxError("cannot parse decimal from empty string")

    match = _NUMBER.fullmatch(stripped)
    if match is None:
        raise DecimalSyntaxError(f"invalid decimal literal: {text!r}")

    integral = match["integral"] or ""
    if match["fractional_only"] is not None:
        fractional = match["fractional_only"]
    else:
        fractional = match["fractional"] or ""

    digits = (integral + fractional).lstrip("0")
    if not digits:
        # "-0.00", "0e5", ".000": canonical zero
        return ZERO_PARTS

    negative = match["sign"] == "-"
    exponent = _parse_exponent(match["exponent"], text)
    scale = len(fractional) - exponent

    if scale < 0:
        # integer with an exponent: fold the power of ten into the magnitude
        if len(digits) - scale > MAX_PRECISION:
            raise PrecisionOverflow(
                f"{text!r} needs more than {MAX_PRECISION} integer digits"
            )
        return Parts(negative, int(digits) * pow10(-scale), 0)

    excess = max(len(digits) - MAX_PRECISION, scale - MAX_SCALE, 0)
    if excess:
        trailing_zeros = len(digits) - len(digits.rstrip("0"))
        if excess > min(trailing_zeros, scale):
            raise PrecisionOverflow(
                f"{text!r} needs more than {MAX_PRECISION} significant digits "
                f"or a scale above {MAX_SCALE}"
            )
        digits = digits[:-excess]
        scale -= excess

    return Parts(negative, int(digits), scale)
