#!/usr/bin/env python3
"""
decimal_demo.py — A tour of decimal38

================================================================================
THE BUG
================================================================================

    >>> 0.1 + 0.2
    0.30000000000000004

This is not a Python bug. It's IEEE 754 binary floating point working
exactly as designed: 0.1 has no finite binary expansion.

================================================================================
THE FIX
================================================================================

    from decimal38 import parse

    >>> parse("0.1") + parse("0.2")
    Decimal('0.3')

Decimal digits are stored as decimal digits: a 38-digit integer magnitude
and a scale. Addition is exact; multiplication and division round ONCE,
with a rounding strategy you can name.

================================================================================
"""

import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from decimal38 import (
    Decimal,
    DecimalOverflow,
    PrecisionOverflow,
    RoundingMode,
    parse,
)
from decimal38 import serde


def demonstrate_bug():
    """Show the floating-point bug and the exact result."""
    print("=" * 60)
    print("THE BUG")
    print("=" * 60)
    print()
    print(f">>> 0.1 + 0.2            -> {0.1 + 0.2!r}")
    print(f">>> parse('0.1') + '0.2' -> {parse('0.1') + parse('0.2')!r}")
    print()


def demonstrate_precision():
    """Show the 38-digit budget."""
    print("=" * 60)
    print("38 SIGNIFICANT DIGITS")
    print("=" * 60)
    print()

    a = parse("123456789.987654321")
    b = parse("987654321.123456789")
    print(f"{a} * {b}")
    print(f"  = {a * b}")
    print()

    third = Decimal.one() / 3
    print(f"1 / 3          = {third}")
    print(f"  precision    = {third.precision} digits")
    print(f"  round(2)     = {third.round(2)}")
    print(f"  2/3 HALF_UP  = {Decimal.of(2) / 3}")
    print(f"  2/3 DOWN     = {Decimal.of(2).div(3, RoundingMode.DOWN)}")
    print(f"  sqrt(2)      = {Decimal.of(2).sqrt()}")
    print()

    print(">>> parse('1' * 39)")
    try:
        parse("1" * 39)
    except PrecisionOverflow as e:
        print(f"PrecisionOverflow: {e}")
    print()


def demonstrate_scale():
    """Trailing zeros are kept, equality is numeric."""
    print("=" * 60)
    print("SCALE")
    print("=" * 60)
    print()

    price = parse("19.90")
    print(f"price          = {price}  (scale {price.scale})")
    print(f"price * 3      = {price * 3}")
    print(f"price == 19.9  -> {price == parse('19.9')}")
    print(f"normalize()    = {price.normalize()}")
    print(f"rescale(4)     = {price.rescale(4)}")
    print(f"format .1f     = {price:.1f}")
    print(f"format e       = {price:e}")
    print()

    print(">>> parse('123456.789').round_with_precision(5, 2)   # NUMERIC(5, 2)")
    try:
        parse("123456.789").round_with_precision(5, 2)
    except DecimalOverflow as e:
        print(f"DecimalOverflow: {e}")
    print()


def demonstrate_type_safety():
    """Floats must be converted explicitly."""
    print("=" * 60)
    print("TYPE SAFETY")
    print("=" * 60)
    print()

    print(">>> parse('1') + 0.5")
    try:
        parse("1") + 0.5
    except TypeError as e:
        print(f"TypeError: {e}")
    print()
    print(f">>> Decimal.from_float(0.5) + 1 -> {Decimal.from_float(0.5) + 1!r}")
    print()


def demonstrate_serialization():
    """Binary codec and JSON."""
    print("=" * 60)
    print("SERIALIZATION")
    print("=" * 60)
    print()

    value = parse("-123456789.987654321")
    data = value.encode()
    print(f"encode()       = {data.hex()} ({len(data)} bytes)")
    print(f"decode()       = {Decimal.decode(data)}")
    print(f"compact 42     = {Decimal.of(42).encode(compact=True).hex()}")
    print(f"json           = {serde.dumps({'total': value})}")
    print()


def main():
    demonstrate_bug()
    demonstrate_precision()
    demonstrate_scale()
    demonstrate_type_safety()
    demonstrate_serialization()

    print("=" * 60)
    print("INVARIANT: parse(str(x)) == x, with the same scale")
    print("=" * 60)
    for text in ("0", "-12.50", "0.00000000000000000000000000000000000001", "9" * 38):
        x = parse(text)
        assert parse(str(x)).as_tuple() == x.as_tuple()
        print(f"  {text:>40} ✓")


if __name__ == "__main__":
    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    main()
