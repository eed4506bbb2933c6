"""
Central Configuration File (SSOT).

The precision cap is part of the type, not a runtime parameter: these values
are read by every component and are not meant to be changed at runtime.
"""

from .rounding import RoundingMode

# --- Representation limits ---
MAX_PRECISION: int = 38                      # significant digits, NUMERIC(38, x)
MAX_SCALE: int = 38                          # digits right of the decimal point
MAX_MAGNITUDE: int = 10 ** MAX_PRECISION - 1

# --- Rounding policy ---
# Applied uniformly whenever multiply, divide or sqrt must discard digits.
DEFAULT_ROUNDING: RoundingMode = RoundingMode.HALF_UP

# --- Parser limits ---
# Exponents with more significant digits than this can never produce a
# representable value; they are rejected before computing any power of ten.
MAX_EXPONENT_DIGITS: int = 4

# --- Binary codec ---
MAX_BINARY_SIZE: int = 18                    # flags + scale + 16 magnitude bytes
COMPACT_LIMIT: int = 1 << 16                 # small non-negative ints: 1-2 bytes
SIGN_MASK: int = 0x01
SCALE_SIGN_MASK: int = 0x02
FLAGS_MASK: int = SIGN_MASK | SCALE_SIGN_MASK
