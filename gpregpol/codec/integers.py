# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/codec/integers.py
"""Little-endian integer coding with 32/64-bit signed widths."""
from __future__ import annotations

from ..core.exceptions import InvalidIntegerSize, InvalidRecord

MAX_INT_BYTES = 8


def to_signed(value: int, bits: int) -> int:
    """Reinterpret an unsigned `bits`-wide value as two's complement."""
    if value >= 1 << (bits - 1):
        return value - (1 << bits)
    return value


def decode_le_int(data: bytes) -> int:
    """
    Decode up to 8 little-endian bytes.

    Up to 4 bytes yield a signed 32-bit value, 5 to 8 bytes a signed 64-bit
    value. An empty input decodes to 0.
    """
    size = len(data)
    if size > MAX_INT_BYTES:
        raise InvalidIntegerSize(msg=f"integer field too wide: {size} bytes (max {MAX_INT_BYTES})", size=size)

    acc = 0
    for i in range(size - 1, -1, -1):
        acc = (acc << 8) | data[i]

    return to_signed(acc, 32 if size <= 4 else 64)


def encode_le_int(value: int, width: int) -> bytes:
    """
    Two's complement little-endian encoding of `value` in `width` bytes.

    Accepts both the signed and the unsigned range of the width, so
    0xFFFFFFFF and -1 encode to the same DWORD.
    """
    if width < 1 or width > MAX_INT_BYTES:
        raise InvalidIntegerSize(msg=f"unsupported integer width: {width} bytes", size=width)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRecord(msg=f"expected an integer, got {type(value).__name__}")

    bits = width * 8
    if value < -(1 << (bits - 1)) or value >= (1 << bits):
        raise InvalidRecord(msg=f"integer {value} does not fit in {width} bytes")
    return (value & ((1 << bits) - 1)).to_bytes(width, "little")


def decode_i32(data: bytes) -> int:
    if len(data) != 4:
        raise InvalidIntegerSize(msg=f"expected 4 bytes, got {len(data)}", size=len(data))
    return decode_le_int(data)


def encode_i32(value: int) -> bytes:
    return encode_le_int(value, 4)
