"""
arithmetic.py — The decimal arithmetic engine

================================================================================
DESIGN PRINCIPLES
================================================================================

1. PURE FUNCTIONS OVER PARTS
   Every operation takes (negative, magnitude, scale) triples and returns a
   new one. Nothing is mutated, nothing is cached, nothing is shared.

2. FIXED WIDTH, WIDE INTERMEDIATES
   Inputs and outputs respect the 38-digit budget. Intermediates (aligned
   operands, the full product, the scaled dividend) are allowed to be wider;
   Python's int plays the role of the double-width register.

3. EXACT OR ROUND ONCE
   - add / subtract / remainder are exact: if the exact result needs more
     than 38 digits they raise PrecisionOverflow.
   - multiply / divide / sqrt round their tail away in a single step with a
     documented RoundingMode (HALF_UP by default). If the integer part alone
     needs more than 38 digits they raise DecimalOverflow.

4. CANONICAL ZERO
   A zero result is always (False, 0, 0).

================================================================================
"""

from __future__ import annotations
import logging
import math

from .config import DEFAULT_ROUNDING, MAX_MAGNITUDE, MAX_PRECISION, MAX_SCALE
from .errors import (
    DecimalDomainError,
    DecimalOverflow,
    DivisionByZero,
    OutOfRange,
    PrecisionOverflow,
)
from .rounding import (
    Parts,
    RoundingMode,
    ZERO_PARTS,
    count_digits,
    div_round,
    pow10,
    strip_trailing_zeros,
)

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPERS
# ==============================================================================

def _make(negative: bool, magnitude: int, scale: int) -> Parts:
    if magnitude == 0:
        return ZERO_PARTS
    return Parts(negative, magnitude, scale)


def _signed(parts: Parts, scale: int) -> int:
    """Signed magnitude of `parts` aligned to `scale` (>= parts.scale)."""
    aligned = parts.magnitude * pow10(scale - parts.scale)
    return -aligned if parts.negative else aligned


def _exact(negative: bool, magnitude: int, scale: int, operation: str) -> Parts:
    """Fit an exact result, dropping only trailing zeros that carry no value."""
    while magnitude > MAX_MAGNITUDE and scale > 0 and magnitude % 10 == 0:
        magnitude //= 10
        scale -= 1
    if magnitude > MAX_MAGNITUDE:
        raise PrecisionOverflow(
            f"{operation} result needs more than {MAX_PRECISION} significant digits"
        )
    return _make(negative, magnitude, scale)


def _fit(
    negative: bool,
    numerator: int,
    denominator: int,
    scale: int,
    rounding: RoundingMode,
) -> Parts:
    """
    Round (numerator / denominator) * 10**-scale into the 38-digit budget.

    The quotient is rounded exactly once, using the full remainder, so no
    double-rounding can occur.
    """
    digits = count_digits(numerator // denominator)
    shift = max(digits - MAX_PRECISION, scale - MAX_SCALE, 0)
    if shift:
        logger.debug(
            "rounding away %d trailing digit(s) with %s", shift, rounding
        )
        denominator *= pow10(shift)
        scale -= shift

    magnitude = div_round(numerator, denominator, rounding, negative)
    if magnitude > MAX_MAGNITUDE:
        # carry into a 39th digit: 99..9.5 -> 100..0, exactly divisible by 10
        magnitude //= 10
        scale -= 1

    if scale < 0:
        raise DecimalOverflow(
            f"integer part of the result needs more than {MAX_PRECISION} digits"
        )
    return _make(negative, magnitude, scale)


# ==============================================================================
# SIGN
# ==============================================================================

def negate(parts: Parts) -> Parts:
    """Flip the sign; zero stays canonical."""
    return _make(not parts.negative, parts.magnitude, parts.scale)


def absolute(parts: Parts) -> Parts:
    """Clear the sign."""
    return _make(False, parts.magnitude, parts.scale)


# ==============================================================================
# COMPARISON
# ==============================================================================

def compare(left: Parts, right: Parts) -> int:
    """
    Compare two values numerically.

    Returns -1, 0 or 1. Scales are aligned on copies; 1.50 and 1.5 are equal.
    """
    scale = max(left.scale, right.scale)
    a = _signed(left, scale)
    b = _signed(right, scale)
    return (a > b) - (a < b)


# ==============================================================================
# ADDITION / SUBTRACTION
# ==============================================================================

def add(left: Parts, right: Parts) -> Parts:
    """
    Exact sum, at the larger of the two scales.

    Raises:
        PrecisionOverflow: if the sum needs more than 38 digits
    """
    if right.magnitude == 0:
        return left
    if left.magnitude == 0:
        return right

    scale = max(left.scale, right.scale)
    total = _signed(left, scale) + _signed(right, scale)
    return _exact(total < 0, abs(total), scale, "addition")


def subtract(left: Parts, right: Parts) -> Parts:
    """Exact difference left - right."""
    return add(left, negate(right))


# ==============================================================================
# MULTIPLICATION / DIVISION
# ==============================================================================

def multiply(
    left: Parts,
    right: Parts,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> Parts:
    """
    Product with scale = left.scale + right.scale.

    Digits beyond the 38-digit budget (or beyond scale 38) are rounded away.

    Raises:
        DecimalOverflow: if the integer part needs more than 38 digits
    """
    if left.magnitude == 0 or right.magnitude == 0:
        return ZERO_PARTS

    return _fit(
        left.negative != right.negative,
        left.magnitude * right.magnitude,
        1,
        left.scale + right.scale,
        rounding,
    )


def divide(
    left: Parts,
    right: Parts,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> Parts:
    """
    Quotient left / right, rounded to 38 significant digits.

    The dividend is scaled up so the integer division yields at least 39
    digits; the quotient is then rounded once. Trailing zeros are trimmed
    down to the ideal scale max(0, left.scale - right.scale), so 1.00 / 1 is
    1.00 and 10 / 4 is 2.5.

    Raises:
        DivisionByZero: if right is zero
        DecimalOverflow: if the integer part needs more than 38 digits
    """
    if right.magnitude == 0:
        raise DivisionByZero("division by zero")
    if left.magnitude == 0:
        return ZERO_PARTS

    shift = MAX_PRECISION + 1 + count_digits(right.magnitude)
    shift += max(right.scale - left.scale, 0)

    quotient = _fit(
        left.negative != right.negative,
        left.magnitude * pow10(shift),
        right.magnitude,
        left.scale - right.scale + shift,
        rounding,
    )

    ideal_scale = max(left.scale - right.scale, 0)
    magnitude, scale = strip_trailing_zeros(quotient.magnitude, quotient.scale, ideal_scale)
    return _make(quotient.negative, magnitude, scale)


def integer_divide(left: Parts, right: Parts) -> Parts:
    """
    Integer part of left / right, truncated toward zero.

    Raises:
        DivisionByZero: if right is zero
        DecimalOverflow: if the quotient needs more than 38 digits
    """
    if right.magnitude == 0:
        raise DivisionByZero("integer division by zero")

    scale = max(left.scale, right.scale)
    quotient = abs(_signed(left, scale)) // abs(_signed(right, scale))
    if quotient > MAX_MAGNITUDE:
        raise DecimalOverflow(
            f"integer quotient needs more than {MAX_PRECISION} digits"
        )
    return _make(left.negative != right.negative, quotient, 0)


def remainder(left: Parts, right: Parts) -> Parts:
    """
    left - right * trunc(left / right), exact, with the sign of left.

    Raises:
        DivisionByZero: if right is zero
    """
    if right.magnitude == 0:
        raise DivisionByZero("modulo by zero")
    if left.magnitude == 0:
        return ZERO_PARTS

    scale = max(left.scale, right.scale)
    rest = abs(_signed(left, scale)) % abs(_signed(right, scale))
    return _exact(left.negative, rest, scale, "remainder")


def square_root(parts: Parts) -> Parts:
    """
    Square root rounded half-up to 38 significant digits (scale <= 38).

    The radicand is scaled to 75-76 digits so that an integer square root
    yields the 38 digits at once; since sqrt of an integer is never exactly
    half-way between two integers, comparing against r*r + r decides the
    rounding without a remainder.

    Raises:
        DecimalDomainError: if the value is negative
    """
    if parts.magnitude == 0:
        return ZERO_PARTS
    if parts.negative:
        raise DecimalDomainError("square root of a negative number")

    exponent = 2 * MAX_PRECISION - count_digits(parts.magnitude)
    if (exponent + parts.scale) % 2:
        exponent -= 1
    root_scale = (exponent + parts.scale) // 2
    if root_scale > MAX_SCALE:
        exponent = 2 * MAX_SCALE - parts.scale
        root_scale = MAX_SCALE

    radicand = parts.magnitude * pow10(exponent)
    root = math.isqrt(radicand)
    if radicand > root * root + root:
        root += 1
    if root > MAX_MAGNITUDE:
        root //= 10
        root_scale -= 1

    magnitude, scale = strip_trailing_zeros(root, root_scale, (parts.scale + 1) // 2)
    return _make(False, magnitude, scale)


# ==============================================================================
# ROUNDING TO A SCALE
# ==============================================================================

def round_to_scale(
    parts: Parts,
    scale: int,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> Parts:
    """
    Round to `scale` fractional digits.

    A negative scale rounds left of the decimal point (round to tens,
    hundreds...); the result then has scale 0. A value already at or below
    `scale` is returned unchanged (no padding).

    Raises:
        DecimalOverflow: if rounding up carries past 38 digits
    """
    if parts.magnitude == 0 or parts.scale <= scale:
        return parts

    # rounding at 10**39 or beyond gives 0 or an overflow, whatever the scale
    scale = max(scale, -(MAX_PRECISION + 1))
    magnitude = div_round(
        parts.magnitude, pow10(parts.scale - scale), rounding, parts.negative
    )

    if scale < 0:
        magnitude *= pow10(-scale)
        scale = 0
        if magnitude > MAX_MAGNITUDE:
            raise DecimalOverflow(
                f"rounded value needs more than {MAX_PRECISION} integer digits"
            )
    return _make(parts.negative, magnitude, scale)


def rescale(
    parts: Parts,
    scale: int,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> Parts:
    """
    Give the value exactly `scale` fractional digits (0..38).

    Padding with zeros raises PrecisionOverflow if the magnitude would exceed
    38 digits; dropping digits rounds with `rounding`. Zero stays canonical.
    """
    if not 0 <= scale <= MAX_SCALE:
        raise OutOfRange(f"scale must be within 0..{MAX_SCALE}, got {scale}")
    if parts.magnitude == 0:
        return ZERO_PARTS

    if scale >= parts.scale:
        magnitude = parts.magnitude * pow10(scale - parts.scale)
        if magnitude > MAX_MAGNITUDE:
            raise PrecisionOverflow(
                f"cannot rescale to {scale}: more than {MAX_PRECISION} digits needed"
            )
        return Parts(parts.negative, magnitude, scale)

    return round_to_scale(parts, scale, rounding)


def round_with_precision(
    parts: Parts,
    precision: int,
    scale: int,
    rounding: RoundingMode = DEFAULT_ROUNDING,
) -> Parts:
    """
    Round for a NUMERIC(precision, scale) column and check that it fits.

    The value is rounded to `scale` digits, then must satisfy
    |value| < 10**(precision - scale).

    Raises:
        DecimalOverflow: if the rounded value does not fit the column
    """
    if not 1 <= precision <= MAX_PRECISION:
        raise OutOfRange(f"precision must be within 1..{MAX_PRECISION}, got {precision}")
    if scale > MAX_SCALE:
        raise OutOfRange(f"scale must be <= {MAX_SCALE}, got {scale}")

    rounded = round_to_scale(parts, scale, rounding)
    if rounded.magnitude == 0:
        return ZERO_PARTS

    integer_digits = count_digits(rounded.magnitude) - rounded.scale
    if integer_digits > precision - scale:
        raise DecimalOverflow(
            f"value does not fit NUMERIC({precision}, {scale})"
        )
    return rounded
