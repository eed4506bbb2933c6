"""
Custom Exception Classes for the Decimal Domain.

Purpose:
- Give every failure of parse, arithmetic, conversion and codec a distinct
  type the caller can inspect.
- Each class also derives from the closest built-in exception, so code that
  already catches ValueError, OverflowError or ZeroDivisionError keeps
  working.
"""


class DecimalError(Exception):
    """Base class for every error raised by decimal38."""
    pass


class DecimalSyntaxError(DecimalError, ValueError):
    """
    Raised when text does not match the decimal grammar:
    - empty or whitespace-only input, a lone sign or a lone '.'
    - a missing exponent digit run, stray characters, NaN/Infinity text
    """
    pass


class PrecisionOverflow(DecimalError, ArithmeticError):
    """
    Raised when a value or result would need more than 38 significant digits
    (or a scale above 38) and cannot be represented exactly.
    """
    pass


class OutOfRange(PrecisionOverflow, ValueError):
    """
    Raised when raw parts (magnitude, scale) violate the representation
    invariants at construction time.
    """
    pass


class DecimalOverflow(DecimalError, OverflowError):
    """
    Raised when the integer part of a result, or a conversion target, cannot
    hold the value's magnitude.
    """
    pass


class DivisionByZero(DecimalError, ZeroDivisionError):
    """Raised when the divisor's magnitude is zero."""
    pass


class CodecError(DecimalError, ValueError):
    """Raised when bytes handed to decode are malformed or truncated."""
    pass


class DecimalDomainError(DecimalError, ValueError):
    """Raised when an operation is undefined for its operand (sqrt of a negative)."""
    pass
