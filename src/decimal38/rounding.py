"""
rounding.py — Rounding strategies and exact integer primitives

================================================================================
DESIGN PRINCIPLES
================================================================================

1. NO FLOATING POINT
   Every rounding decision is taken on integers: a quotient, a remainder and
   the divisor. The result is exact for any magnitude.

2. ONE RULE PER OPERATION
   The engine discards digits in a single step. Rounding twice (first to an
   intermediate width, then to the final one) can move a value across a
   half-way point, so callers always hand the full remainder to div_round().

3. MAGNITUDE + SIGN
   Values are rounded as absolute magnitudes. The sign is only consulted by
   the directed modes (CEILING, FLOOR) which depend on it.

================================================================================
"""

from __future__ import annotations
from enum import Enum
from typing import NamedTuple


# ==============================================================================
# PARTS
# ==============================================================================

class Parts(NamedTuple):
    """
    The raw (sign, magnitude, scale) triple exchanged between components.

    Value = (-1)**negative * magnitude * 10**-scale. Parser, formatter,
    conversions, arithmetic and codec all speak Parts; only core.Decimal
    wraps them into the public value type.
    """
    negative: bool
    magnitude: int
    scale: int


ZERO_PARTS = Parts(False, 0, 0)


# ==============================================================================
# POWERS OF TEN
# ==============================================================================

# 10**0 .. 10**80: enough for a 38-digit magnitude scaled by a 38-digit shift
# plus the guard digits used by division.
POWERS_10: tuple[int, ...] = tuple(10 ** i for i in range(81))


def pow10(exponent: int) -> int:
    """10**exponent, from the table when possible."""
    if exponent < len(POWERS_10):
        return POWERS_10[exponent]
    return 10 ** exponent


def count_digits(value: int) -> int:
    """
    Number of decimal digits of a non-negative integer.

    Zero has one digit, matching how it is written.
    """
    if value < 0:
        raise ValueError(f"count_digits expects a non-negative int, got {value}")
    return len(str(value))


def strip_trailing_zeros(magnitude: int, scale: int, min_scale: int = 0) -> tuple[int, int]:
    """Drop trailing fractional zeros while the scale stays >= min_scale."""
    if magnitude == 0:
        return 0, 0
    while scale > min_scale and magnitude % 10 == 0:
        magnitude //= 10
        scale -= 1
    return magnitude, scale


# ==============================================================================
# ROUNDING STRATEGIES
# ==============================================================================

class RoundingMode(Enum):
    """
    Rounding strategies.

    The choice has real impact:
    - HALF_UP: commercial rounding (0.5 -> 1), the package default
    - HALF_EVEN: banker's rounding, minimises statistical bias
    - HALF_DOWN: 0.5 -> 0
    - DOWN: always toward zero (truncation)
    - UP: always away from zero
    - CEILING: toward +infinity
    - FLOOR: toward -infinity

    Financial regulations often mandate a specific strategy; pass it
    explicitly where it matters.
    """
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    HALF_DOWN = "half_down"
    DOWN = "down"
    UP = "up"
    CEILING = "ceiling"
    FLOOR = "floor"


def div_round(
    numerator: int,
    denominator: int,
    mode: RoundingMode,
    negative: bool = False,
) -> int:
    """
    Divide two non-negative integers and round the quotient.

    Args:
        numerator: dividend magnitude (>= 0)
        denominator: divisor magnitude (> 0)
        mode: rounding strategy
        negative: sign of the represented value, used by CEILING/FLOOR

    Returns:
        The rounded magnitude of numerator / denominator.
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be > 0, got {denominator}")

    quotient, remainder = divmod(numerator, denominator)

    def _half(tie_goes_up: bool) -> int:
        twice = remainder * 2
        if twice > denominator:
            return quotient + 1
        if twice < denominator:
            return quotient
        return quotient + 1 if tie_goes_up else quotient

    def _half_up() -> int:
        return _half(True)

    def _half_even() -> int:
        return _half(quotient % 2 == 1)

    def _half_down() -> int:
        return _half(False)

    def _down() -> int:
        return quotient

    def _up() -> int:
        return quotient + 1

    def _ceiling() -> int:
        return quotient if negative else quotient + 1

    def _floor() -> int:
        return quotient + 1 if negative else quotient

    strategies = {
        RoundingMode.HALF_UP: _half_up,
        RoundingMode.HALF_EVEN: _half_even,
        RoundingMode.HALF_DOWN: _half_down,
        RoundingMode.DOWN: _down,
        RoundingMode.UP: _up,
        RoundingMode.CEILING: _ceiling,
        RoundingMode.FLOOR: _floor,
    }

    strategy = strategies.get(mode)
    if strategy is None:
        raise ValueError(f"Unknown rounding mode: {mode}")

    if remainder == 0:
        return quotient
    return strategy()
