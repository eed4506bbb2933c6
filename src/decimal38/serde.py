"""
serde.py — Serialization adapter

Text for human-readable formats (JSON, YAML, CSV...), the binary codec for
compact ones. Floats never appear on the way out: a Decimal in JSON is a
string, so no consumer can lose digits by reading it as a double.
"""

from __future__ import annotations
import json
from typing import Any

from .core import Decimal


def serialize(value: Decimal, human_readable: bool = True) -> str | bytes:
    """Plain text when human_readable, codec bytes otherwise."""
    if not isinstance(value, Decimal):
        raise TypeError(f"Expected Decimal, got {type(value).__name__}")
    return str(value) if human_readable else value.encode()


def deserialize(data: str | bytes | bytearray | memoryview) -> Decimal:
    """
    Inverse of serialize(): text goes through the parser, bytes through the codec.

    Raises:
        DecimalSyntaxError / PrecisionOverflow: for bad text
        CodecError: for bad bytes
    """
    if isinstance(data, str):
        return Decimal.parse(data)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return Decimal.decode(data)
    raise TypeError(f"Cannot deserialize a Decimal from {type(data).__name__}")


class DecimalJSONEncoder(json.JSONEncoder):
    """
    JSON encoder that writes Decimal as a string, preserving every digit.

    Example:
        >>> json.dumps({"amount": Decimal.parse("123.45")}, cls=DecimalJSONEncoder)
        '{"amount": "123.45"}'
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, Decimal):
            return str(o)
        return super().default(o)


def dumps(obj: Any, **kwargs: Any) -> str:
    """json.dumps with DecimalJSONEncoder."""
    kwargs.setdefault("cls", DecimalJSONEncoder)
    return json.dumps(obj, **kwargs)


def loads(text: str | bytes, integers: bool = False, **kwargs: Any) -> Any:
    """
    json.loads that reads number literals with a fraction or exponent as
    Decimal (and integer literals too when integers=True).
    """
    kwargs.setdefault("parse_float", Decimal.parse)
    if integers:
        kwargs.setdefault("parse_int", Decimal.parse)
    return json.loads(text, **kwargs)
