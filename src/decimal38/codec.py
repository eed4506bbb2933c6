"""
codec.py — Compact binary encoding

================================================================================
LAYOUT
================================================================================

Standard form, 3..18 bytes:

    byte 0      flags   bit 0: value is negative
                        bit 1: scale is non-negative (always set by encode)
    byte 1      |scale|
    byte 2..    magnitude, little-endian, minimal length (1..16 bytes)

Compact form, 1..2 bytes (encode(..., compact=True) only):

    a non-negative integer (scale 0) below 65536, little-endian

A payload of 1 or 2 bytes is always read as the compact form, a payload of 3
bytes or more as the standard form. The standard form is at least 3 bytes,
so the two never collide.

decode() also accepts a cleared scale-sign bit (negative scale, as written
by other producers of this layout) and folds the power of ten into the
magnitude when the result fits.

================================================================================
"""

from __future__ import annotations
import logging
from typing import NoReturn

from .config import (
    COMPACT_LIMIT,
    FLAGS_MASK,
    MAX_BINARY_SIZE,
    MAX_MAGNITUDE,
    MAX_SCALE,
    SCALE_SIGN_MASK,
    SIGN_MASK,
)
from .errors import CodecError
from .rounding import Parts, ZERO_PARTS, pow10

logger = logging.getLogger(__name__)


def encode(parts: Parts, compact: bool = False) -> bytes:
    """
    Encode Parts to bytes.

    Args:
        parts: the value to encode
        compact: use the 1-2 byte form for small non-negative integers
    """
    negative, magnitude, scale = parts

    if compact and scale == 0 and not negative and magnitude < COMPACT_LIMIT:
        return magnitude.to_bytes(1 if magnitude < 256 else 2, "little")

    size = max(1, (magnitude.bit_length() + 7) // 8)
    flags = SCALE_SIGN_MASK | (SIGN_MASK if negative else 0)
    return bytes((flags, scale)) + magnitude.to_bytes(size, "little")


def _reject(reason: str, size: int) -> NoReturn:
    logger.debug("rejecting %d-byte payload: %s", size, reason)
    raise CodecError(reason)


def decode(data: bytes | bytearray | memoryview) -> Parts:
    """
    Decode bytes produced by encode().

    Raises:
        TypeError: if data is not bytes-like
        CodecError: if the payload is empty, too long, carries unknown flag
            bits, or describes a value outside the representation
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes, got {type(data).__name__}")

    payload = bytes(data)
    size = len(payload)

    if size == 0:
        _reject("empty payload", size)
    if size > MAX_BINARY_SIZE:
        _reject(f"payload longer than {MAX_BINARY_SIZE} bytes", size)

    if size <= 2:
        magnitude = int.from_bytes(payload, "little")
        return Parts(False, magnitude, 0) if magnitude else ZERO_PARTS

    flags, abs_scale = payload[0], payload[1]
    if flags & ~FLAGS_MASK:
        _reject(f"unknown flag bits 0x{flags:02x}", size)

    magnitude = int.from_bytes(payload[2:], "little")
    if magnitude > MAX_MAGNITUDE:
        _reject("magnitude has more than 38 digits", size)

    if flags & SCALE_SIGN_MASK:
        if abs_scale > MAX_SCALE:
            _reject(f"scale {abs_scale} above {MAX_SCALE}", size)
        scale = abs_scale
    else:
        magnitude *= pow10(abs_scale)
        scale = 0
        if magnitude > MAX_MAGNITUDE:
            _reject(f"negative scale -{abs_scale} does not fit 38 digits", size)

    if magnitude == 0:
        return ZERO_PARTS
    return Parts(bool(flags & SIGN_MASK), magnitude, scale)
