"""
formatter.py — (sign, magnitude, scale) to text

Three renderings:

- format_plain: the canonical form. Sign only when negative, integer part,
  then '.' and exactly `scale` digits. Never an exponent. parse() of this
  text reproduces the value with the same scale.
- format_scientific: d.ddd e±n, keeping every digit (also lossless), or
  rounded to a number of places.
- format_fixed: exactly `places` fractional digits, rounding or padding.

format_spec() maps Python's format() mini-language onto these.
"""

from __future__ import annotations
import re

from .config import DEFAULT_ROUNDING
from .rounding import Parts, RoundingMode, count_digits, div_round, pow10


def _place_point(digits: str, scale: int) -> str:
    if scale == 0:
        return digits
    if len(digits) <= scale:
        digits = "0" * (scale - len(digits) + 1) + digits
    return f"{digits[:-scale]}.{digits[-scale:]}"


def format_plain(parts: Parts) -> str:
    """Canonical plain-decimal text."""
    negative, magnitude, scale = parts
    body = _place_point(str(magnitude), scale)
    return f"-{body}" if negative and magnitude else body


def format_fixed(
    parts: Parts,
    places: int,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> str:
    """
    Text with exactly `places` fractional digits.

    Extra digits are rounded away with `rounding`; missing ones are padded
    with zeros. A value that rounds to zero is written without a sign.
    """
    if places < 0:
        raise ValueError(f"places must be >= 0, got {places}")

    negative, magnitude, scale = parts
    if places >= scale:
        magnitude *= pow10(places - scale)
    else:
        magnitude = div_round(magnitude, pow10(scale - places), rounding, negative)

    return format_plain(Parts(negative, magnitude, places))


def format_scientific(
    parts: Parts,
    places: int | None = None,
    rounding: RoundingMode = DEFAULT_ROUNDING,
    exponent_char: str = "e",
) -> str:
    """
    Scientific notation: one integer digit, `places` fractional digits.

    With places=None every digit of the magnitude is kept, so the text
    parses back to the identical value and scale.
    """
    negative, magnitude, scale = parts
    digits = str(magnitude)

    if places is not None:
        if places < 0:
            raise ValueError(f"places must be >= 0, got {places}")
        current = len(digits) - 1
        if places < current:
            shift = current - places
            magnitude = div_round(magnitude, pow10(shift), rounding, negative)
            scale -= shift
            if count_digits(magnitude) > places + 1:
                # carry: 9.99 -> 10.0
                magnitude //= 10
                scale -= 1
        elif places > current:
            magnitude *= pow10(places - current)
            scale += places - current
        digits = str(magnitude) if magnitude else "0" * (places + 1)

    exponent = len(digits) - 1 - scale if magnitude else 0
    mantissa = digits[0] if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    sign = "-" if negative and magnitude else ""
    return f"{sign}{mantissa}{exponent_char}{exponent:+d}"


# ==============================================================================
# format() MINI-LANGUAGE
# ==============================================================================

_FORMAT_SPEC = re.compile(
    r"""
    (?:(?P<fill>.)?(?P<align>[<>^]))?
    (?P<sign>[-+ ])?
    (?P<zero>0)?
    (?P<width>[0-9]+)?
    (?:\.(?P<precision>[0-9]+))?
    (?P<type>[eEfF]?)
    """,
    re.VERBOSE | re.DOTALL,
)


def format_spec(parts: Parts, spec: str) -> str:
    """
    Render Parts for format(value, spec).

    Supported: [[fill]align][sign][0][width][.precision][type] with type one
    of '' (plain, or fixed when a precision is given), 'f'/'F' (fixed),
    'e'/'E' (scientific). Rounding uses the package default. The '0' flag
    pads with zeros after the sign, as for int and float.
    """
    match = _FORMAT_SPEC.fullmatch(spec)
    if match is None:
        raise ValueError(f"Invalid format specifier {spec!r} for Decimal")

    precision = int(match["precision"]) if match["precision"] is not None else None
    kind = match["type"]

    if kind in ("e", "E"):
        body = format_scientific(parts, precision, exponent_char=kind)
    elif precision is not None:
        body = format_fixed(parts, precision)
    else:
        body = format_plain(parts)

    sign_flag = match["sign"]
    if not body.startswith("-") and sign_flag in ("+", " "):
        body = sign_flag + body

    if match["width"] is None:
        return body

    width = int(match["width"])
    if match["zero"] and match["align"] is None:
        sign = body[0] if body[0] in "+- " else ""
        return sign + body[len(sign):].rjust(width - len(sign), "0")

    fill = match["fill"] or ("0" if match["zero"] else " ")
    align = match["align"] or ">"
    return format(body, f"{fill}{align}{match['width']}")
