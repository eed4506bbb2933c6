"""
decimal38 — Exact fixed-precision decimals (38 significant digits)

An immutable decimal type for financial calculations, exact aggregation and
NUMERIC(38, x) database columns, where binary floating point's rounding
error is unacceptable.

================================================================================
QUICK START
================================================================================

Basic usage:

    from decimal38 import Decimal, RoundingMode

    # Parse (never loses precision; trailing zeros define the scale)
    price = Decimal.parse("19.90")
    str(price)                                   # '19.90'

    # Exact add/subtract, ints convert implicitly
    total = price * 3 + 1                        # Decimal('60.70')

    # Division rounds once to 38 digits (HALF_UP unless told otherwise)
    third = Decimal.one() / 3
    third.round(2)                               # Decimal('0.33')
    Decimal.of(2).div(3, RoundingMode.DOWN)      # truncated instead

    # Equality is numeric
    Decimal.parse("1.50") == Decimal.parse("1.5")    # True

Storage and transport:

    data = total.encode()                        # 3..18 bytes
    Decimal.decode(data) == total                # True

    from decimal38 import serde
    serde.dumps({"total": total})                # '{"total": "60.70"}'

================================================================================
"""

import logging

from .config import MAX_PRECISION, MAX_SCALE
from .core import Decimal, parse
from .errors import (
    CodecError,
    DecimalDomainError,
    DecimalError,
    DecimalOverflow,
    DecimalSyntaxError,
    DivisionByZero,
    OutOfRange,
    PrecisionOverflow,
)
from .rounding import RoundingMode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Decimal",
    "RoundingMode",
    "parse",
    "MAX_PRECISION",
    "MAX_SCALE",
    # Errors
    "DecimalError",
    "DecimalSyntaxError",
    "PrecisionOverflow",
    "OutOfRange",
    "DecimalOverflow",
    "DivisionByZero",
    "CodecError",
    "DecimalDomainError",
]
