"""
core.py — Domain Primitive for exact 38-digit decimals

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   An unsigned integer magnitude (at most 38 digits), a scale (0..38) and a
   sign. Value = (-1)**negative * magnitude * 10**-scale.
   Never floating point internally.

2. TYPE SAFETY
   Operations accept Decimal and int (exact conversion).
   Operations with float raise TypeError: use Decimal.from_float().

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.
   No side effects, safe to share between threads.

4. FIXED PRECISION
   The 38-digit cap is part of the type, not a runtime parameter.
   Results that cannot be represented exactly either round once (multiply,
   divide, sqrt, with a documented RoundingMode) or raise.

5. CANONICAL ZERO
   "-0.00" and "0" are the same value with the same parts: (False, 0, 0).

================================================================================
NUMERIC(38, x)
================================================================================

The 38-digit budget matches the widest NUMERIC / DECIMAL column of the major
SQL databases. round_with_precision(p, s) checks a value against a narrower
NUMERIC(p, s) column before it is written.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
import numbers

from . import arithmetic, codec, convert
from .config import DEFAULT_ROUNDING, MAX_MAGNITUDE, MAX_PRECISION, MAX_SCALE
from .errors import OutOfRange
from .formatter import format_fixed, format_plain, format_scientific, format_spec
from .parser import parse_parts
from .rounding import Parts, RoundingMode, count_digits, pow10, strip_trailing_zeros


def _operand(value: object) -> Parts | None:
    """Parts of an implicit operand, or None when the type is not supported."""
    if isinstance(value, Decimal):
        return value._parts()
    if isinstance(value, int):
        return convert.parts_from_int(value)
    if isinstance(value, float):
        raise TypeError(
            "Operation not allowed: Decimal and float. "
            "Use Decimal.from_float() to convert explicitly."
        )
    return None


# ==============================================================================
# DECIMAL CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True, order=False)
class Decimal:
    """
    Domain Primitive for exact decimal values.

    INVARIANTS:
    1. _magnitude is an int in 0..10**38 - 1
    2. _scale is an int in 0..38
    3. zero is always (negative=False, scale=0)

    USAGE:
        price = Decimal.parse("19.99")
        total = price * 3                      # Decimal('59.97')
        share = total / 7                      # rounded once, HALF_UP

    SERIALIZATION:
        str() for text, encode() for bytes, to_dict() for
        {"magnitude": int, "scale": int, "negative": bool}.
        NEVER serialize as float.
    """
    _magnitude: int
    _scale: int = 0
    _negative: bool = False

    def __post_init__(self) -> None:
        magnitude, scale = self._magnitude, self._scale
        if not isinstance(magnitude, int) or isinstance(magnitude, bool):
            raise TypeError(f"magnitude must be int, got {type(magnitude).__name__}")
        if not isinstance(scale, int) or isinstance(scale, bool):
            raise TypeError(f"scale must be int, got {type(scale).__name__}")
        if not 0 <= magnitude <= MAX_MAGNITUDE:
            raise OutOfRange(
                f"magnitude must have at most {MAX_PRECISION} digits and be >= 0"
            )
        if not 0 <= scale <= MAX_SCALE:
            raise OutOfRange(f"scale must be within 0..{MAX_SCALE}, got {scale}")

        if magnitude == 0:
            object.__setattr__(self, "_scale", 0)
            object.__setattr__(self, "_negative", False)
        elif not isinstance(self._negative, bool):
            object.__setattr__(self, "_negative", bool(self._negative))

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_parts(cls, magnitude: int, scale: int = 0, negative: bool = False) -> Decimal:
        """
        Constructor from raw parts. Validates every invariant.

        Raises:
            OutOfRange: magnitude above 38 digits or scale outside 0..38
        """
        return cls(_magnitude=magnitude, _scale=scale, _negative=negative)

    @classmethod
    def _wrap(cls, parts: Parts) -> Decimal:
        return cls(parts.magnitude, parts.scale, parts.negative)

    @classmethod
    def parse(cls, text: str) -> Decimal:
        """Constructor from decimal text, e.g. "-12.50" or "1.5e3"."""
        return cls._wrap(parse_parts(text))

    @classmethod
    def from_int(cls, value: int) -> Decimal:
        return cls._wrap(convert.parts_from_int(value))

    @classmethod
    def from_float(cls, value: float, exact: bool = False) -> Decimal:
        """
        Constructor from float.

        WARNING: the conversion happens HERE, once. By default the shortest
        repr() of the float is used (0.1 -> 0.1); exact=True expands the
        binary value instead (0.1 -> 0.1000000000000000055511151231257827
        does not fit and raises PrecisionOverflow).

        Exists for legacy systems and user input. Prefer parse() or of().
        """
        return cls._wrap(convert.parts_from_float(value, exact=exact))

    @classmethod
    def of(cls, value: Decimal | int | str) -> Decimal:
        """
        Generic constructor from Decimal, int or str.

        Floats are rejected: use from_float() to make the conversion explicit.
        """
        if isinstance(value, Decimal):
            return value
        if isinstance(value, int):
            return cls.from_int(value)
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, float):
            raise TypeError("Decimal.of() does not accept float. Use Decimal.from_float().")
        raise TypeError(f"Cannot build a Decimal from {type(value).__name__}")

    @classmethod
    def zero(cls) -> Decimal:
        """Zero. Useful as the start value of sum()."""
        return cls(0)

    @classmethod
    def one(cls) -> Decimal:
        return cls(1)

    # -------------------------------------------------------------------------
    # Properties and predicates
    # -------------------------------------------------------------------------

    @property
    def magnitude(self) -> int:
        """Unscaled magnitude, always >= 0."""
        return self._magnitude

    @property
    def scale(self) -> int:
        """Number of digits right of the decimal point."""
        return self._scale

    @property
    def negative(self) -> bool:
        return self._negative

    @property
    def precision(self) -> int:
        """Number of significant digits of the magnitude (1 for zero)."""
        return count_digits(self._magnitude)

    def as_tuple(self) -> tuple[bool, int, int]:
        """(negative, magnitude, scale)"""
        return (self._negative, self._magnitude, self._scale)

    def _parts(self) -> Parts:
        return Parts(self._negative, self._magnitude, self._scale)

    def is_zero(self) -> bool:
        return self._magnitude == 0

    def is_negative(self) -> bool:
        return self._negative

    def is_positive(self) -> bool:
        return self._magnitude > 0 and not self._negative

    # -------------------------------------------------------------------------
    # Arithmetic operations
    # -------------------------------------------------------------------------

    def __add__(self, other: Decimal | int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.add(self._parts(), parts))

    def __radd__(self, other: int) -> Decimal:
        return self.__add__(other)

    def __sub__(self, other: Decimal | int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.subtract(self._parts(), parts))

    def __rsub__(self, other: int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.subtract(parts, self._parts()))

    def __mul__(self, other: Decimal | int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.multiply(self._parts(), parts))

    def __rmul__(self, other: int) -> Decimal:
        return self.__mul__(other)

    def __truediv__(self, other: Decimal | int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.divide(self._parts(), parts))

    def __rtruediv__(self, other: int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.divide(parts, self._parts()))

    def __floordiv__(self, other: Decimal | int) -> Decimal:
        """Integer quotient, truncated toward zero (not floored)."""
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.integer_divide(self._parts(), parts))

    def __rfloordiv__(self, other: int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.integer_divide(parts, self._parts()))

    def __mod__(self, other: Decimal | int) -> Decimal:
        """Remainder with the sign of the dividend: -7 % 3 == -1."""
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.remainder(self._parts(), parts))

    def __rmod__(self, other: int) -> Decimal:
        parts = _operand(other)
        if parts is None:
            return NotImplemented
        return Decimal._wrap(arithmetic.remainder(parts, self._parts()))

    def __divmod__(self, other: Decimal | int) -> tuple[Decimal, Decimal]:
        return (self // other, self % other)

    def __rdivmod__(self, other: int) -> tuple[Decimal, Decimal]:
        return (other // self, other % self)

    def __neg__(self) -> Decimal:
        return Decimal._wrap(arithmetic.negate(self._parts()))

    def __pos__(self) -> Decimal:
        return self

    def __abs__(self) -> Decimal:
        return Decimal._wrap(arithmetic.absolute(self._parts()))

    def mul(self, other: Decimal | int, rounding: RoundingMode = DEFAULT_ROUNDING) -> Decimal:
        """Multiplication with an explicit rounding strategy for discarded digits."""
        return Decimal._wrap(arithmetic.multiply(self._parts(), Decimal.of(other)._parts(), rounding))

    def div(self, other: Decimal | int, rounding: RoundingMode = DEFAULT_ROUNDING) -> Decimal:
        """Division with an explicit rounding strategy for discarded digits."""
        return Decimal._wrap(arithmetic.divide(self._parts(), Decimal.of(other)._parts(), rounding))

    def sqrt(self) -> Decimal:
        """
        Square root, rounded half-up to 38 significant digits.

        Raises:
            DecimalDomainError: if self is negative
        """
        return Decimal._wrap(arithmetic.square_root(self._parts()))

    # -------------------------------------------------------------------------
    # Scale and rounding
    # -------------------------------------------------------------------------

    def normalize(self) -> Decimal:
        """Drop trailing fractional zeros: 1.500 -> 1.5, 100 stays 100."""
        magnitude, scale = strip_trailing_zeros(self._magnitude, self._scale)
        return Decimal(magnitude, scale, self._negative)

    def rescale(self, scale: int, rounding: RoundingMode = DEFAULT_ROUNDING) -> Decimal:
        """Exactly `scale` fractional digits, padding or rounding."""
        return Decimal._wrap(arithmetic.rescale(self._parts(), scale, rounding))

    def round(self, scale: int = 0, rounding: RoundingMode = DEFAULT_ROUNDING) -> Decimal:
        """
        Round to at most `scale` fractional digits.

        Negative scale rounds left of the point: round(-2) rounds to hundreds.
        A value with fewer digits is returned unchanged.
        """
        return Decimal._wrap(arithmetic.round_to_scale(self._parts(), scale, rounding))

    def trunc(self, scale: int = 0) -> Decimal:
        """Drop digits beyond `scale` (round toward zero)."""
        return self.round(scale, RoundingMode.DOWN)

    def floor(self) -> Decimal:
        return self.round(0, RoundingMode.FLOOR)

    def ceil(self) -> Decimal:
        return self.round(0, RoundingMode.CEILING)

    def round_with_precision(
        self,
        precision: int,
        scale: int,
        rounding: RoundingMode = DEFAULT_ROUNDING,
    ) -> Decimal:
        """
        Round for a NUMERIC(precision, scale) column.

        Raises:
            DecimalOverflow: if the rounded value needs more than
                precision - scale integer digits
        """
        return Decimal._wrap(
            arithmetic.round_with_precision(self._parts(), precision, scale, rounding)
        )

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def compare(self, other: Decimal | int) -> int:
        """-1, 0 or 1."""
        return arithmetic.compare(self._parts(), Decimal.of(other)._parts())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Decimal):
            return arithmetic.compare(self._parts(), other._parts()) == 0
        if isinstance(other, int):
            return self._signed_fraction() == other
        return NotImplemented

    def __lt__(self, other: Decimal | int) -> bool:
        return self._compare_checked(other) < 0

    def __le__(self, other: Decimal | int) -> bool:
        return self._compare_checked(other) <= 0

    def __gt__(self, other: Decimal | int) -> bool:
        return self._compare_checked(other) > 0

    def __ge__(self, other: Decimal | int) -> bool:
        return self._compare_checked(other) >= 0

    def _compare_checked(self, other: object) -> int:
        if isinstance(other, Decimal):
            return arithmetic.compare(self._parts(), other._parts())
        if isinstance(other, int):
            value = self._signed_fraction()
            return (value > other) - (value < other)
        raise TypeError(f"Cannot compare Decimal with {type(other).__name__}")

    def _signed_fraction(self) -> Fraction:
        numerator = -self._magnitude if self._negative else self._magnitude
        return Fraction(numerator, pow10(self._scale))

    def __hash__(self) -> int:
        # equal values hash equal, and match the hash of an equal int
        if self._scale == 0:
            return hash(-self._magnitude if self._negative else self._magnitude)
        return hash(self._signed_fraction())

    def __bool__(self) -> bool:
        return self._magnitude != 0

    # -------------------------------------------------------------------------
    # Python numeric protocols
    # -------------------------------------------------------------------------

    def __int__(self) -> int:
        return convert.truncate_to_int(self._parts())

    def __trunc__(self) -> int:
        return convert.truncate_to_int(self._parts())

    def __floor__(self) -> int:
        return int(self.floor())

    def __ceil__(self) -> int:
        return int(self.ceil())

    def __round__(self, ndigits: int | None = None) -> int | Decimal:
        if ndigits is None:
            return int(self.round(0))
        return self.round(ndigits)

    def __float__(self) -> float:
        return convert.to_float(self._parts())

    def to_int(
        self,
        bits: int | None = None,
        signed: bool = True,
        rounding: RoundingMode = DEFAULT_ROUNDING,
    ) -> int:
        """
        Round to int and check the range of a fixed-width integer type.

        Raises:
            DecimalOverflow: if the value does not fit
        """
        return convert.to_int(self._parts(), bits, signed, rounding)

    def to_float(self, single: bool = False) -> float:
        """
        Nearest float (binary32 when single=True).

        WARNING: for display and interop only. Do not compute with the result.
        """
        return convert.to_float(self._parts(), single)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return format_plain(self._parts())

    def __repr__(self) -> str:
        return f"Decimal('{self}')"

    def __format__(self, spec: str) -> str:
        return format_spec(self._parts(), spec)

    def to_scientific(self, places: int | None = None) -> str:
        """Scientific notation, lossless when places is None."""
        return format_scientific(self._parts(), places)

    def to_fixed(self, places: int, rounding: RoundingMode = DEFAULT_ROUNDING) -> str:
        """Text with exactly `places` fractional digits."""
        return format_fixed(self._parts(), places, rounding)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """
        Serialize for persistence/API.

        Format: {"magnitude": int, "scale": int, "negative": bool}
        """
        return {
            "magnitude": self._magnitude,
            "scale": self._scale,
            "negative": self._negative,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Decimal:
        """
        Deserialize from to_dict() output.

        Raises:
            ValueError: if a key is missing
            OutOfRange: if the parts violate the invariants
        """
        try:
            magnitude = data["magnitude"]
            scale = data.get("scale", 0)
            negative = data.get("negative", False)
        except KeyError as e:
            raise ValueError(f"Missing key: {e}") from e

        if not isinstance(negative, bool):
            raise TypeError(f"negative must be bool, got {type(negative).__name__}")
        return cls.from_parts(magnitude, scale, negative)

    def encode(self, compact: bool = False) -> bytes:
        """Binary form, 3..18 bytes (1..2 for small integers when compact)."""
        return codec.encode(self._parts(), compact)

    @classmethod
    def decode(cls, data: bytes) -> Decimal:
        """
        Inverse of encode().

        Raises:
            CodecError: if the bytes are malformed
        """
        return cls._wrap(codec.decode(data))


numbers.Number.register(Decimal)


def parse(text: str) -> Decimal:
    """Shorthand for Decimal.parse(text)."""
    return Decimal.parse(text)
