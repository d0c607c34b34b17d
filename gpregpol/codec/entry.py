# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/codec/entry.py
"""
Single-entry codec.

Decoding walks a fixed sequence of states over a byte buffer. Every reader
takes the buffer and a cursor (byte offset) and returns the parsed field with
the advanced cursor; no state is kept between calls.

    [ KeyName NUL ; ValueName NUL ; Type(i32) ; Length(i32) ; Data ]
"""
from __future__ import annotations

from enum import Enum
from typing import Tuple

from ..core.exceptions import MalformedEntry, UnsupportedValueType
from ..model import PolicyRecord
from .constants import (
    CHAR_WIDTH,
    CLOSE_BRACKET,
    NUL,
    OPEN_BRACKET,
    SEMICOLON,
    TEXT_ENCODING,
    RegistryValueKind,
)
from .integers import decode_le_int, encode_i32
from .values import codec_for, decode_value, encode_value

Cursor = int


class DecodeState(str, Enum):
    EXPECT_OPEN_BRACKET = "expect_open_bracket"
    READ_KEY_NAME = "read_key_name"
    READ_VALUE_NAME = "read_value_name"
    READ_VALUE_TYPE = "read_value_type"
    READ_VALUE_LENGTH = "read_value_length"
    READ_VALUE_DATA = "read_value_data"
    EXPECT_CLOSE_BRACKET = "expect_close_bracket"


def _malformed(msg: str, pos: Cursor, state: DecodeState) -> MalformedEntry:
    err = MalformedEntry(msg=msg, offset=pos)
    err.with_context(state=state.value)
    return err


def _find_char(buf: bytes, char: bytes, pos: Cursor) -> int:
    """Offset of the next UTF-16 code unit equal to `char` at or after `pos`, or -1."""
    end = len(buf) - CHAR_WIDTH
    while pos <= end:
        if buf[pos : pos + CHAR_WIDTH] == char:
            return pos
        pos += CHAR_WIDTH
    return -1


def _expect(buf: bytes, char: bytes, pos: Cursor, state: DecodeState) -> Cursor:
    if buf[pos : pos + CHAR_WIDTH] != char:
        found = bytes(buf[pos : pos + CHAR_WIDTH])
        raise _malformed(f"expected {char.decode(TEXT_ENCODING)!r}, found {found!r}", pos, state)
    return pos + CHAR_WIDTH


def read_open_bracket(buf: bytes, pos: Cursor) -> Cursor:
    return _expect(buf, OPEN_BRACKET, pos, DecodeState.EXPECT_OPEN_BRACKET)


def read_name(buf: bytes, pos: Cursor, state: DecodeState) -> Tuple[str, Cursor]:
    """Null-terminated name up to the next ';'. Returns (name, cursor past ';')."""
    semi = _find_char(buf, SEMICOLON, pos)
    if semi < 0:
        raise _malformed("missing ';' after name", pos, state)

    try:
        text = bytes(buf[pos:semi]).decode(TEXT_ENCODING, errors="surrogatepass")
    except UnicodeDecodeError as e:
        raise _malformed(f"name is not valid UTF-16LE: {e}", pos, state) from e

    if not text.endswith(NUL):
        raise _malformed("name is missing its null terminator", semi, state)
    name = text[:-1]
    if NUL in name:
        raise _malformed("name has a null character before its terminator", pos + name.index(NUL) * CHAR_WIDTH, state)
    return name, semi + CHAR_WIDTH


def read_int_field(buf: bytes, pos: Cursor, state: DecodeState) -> Tuple[int, Cursor]:
    """4-byte little-endian signed integer followed by ';'."""
    if len(buf) - pos < 4:
        raise _malformed("truncated integer field", pos, state)
    value = decode_le_int(bytes(buf[pos : pos + 4]))
    return value, _expect(buf, SEMICOLON, pos + 4, state)


def read_value_type(buf: bytes, pos: Cursor) -> Tuple[RegistryValueKind, Cursor]:
    code, nxt = read_int_field(buf, pos, DecodeState.READ_VALUE_TYPE)
    try:
        return RegistryValueKind(code), nxt
    except ValueError:
        raise UnsupportedValueType(msg=f"unknown value type code {code}", offset=pos).with_context(value_type=code) from None


def read_value_length(buf: bytes, pos: Cursor) -> Tuple[int, Cursor]:
    length, nxt = read_int_field(buf, pos, DecodeState.READ_VALUE_LENGTH)
    if length < 0:
        raise _malformed(f"negative value length {length}", pos, DecodeState.READ_VALUE_LENGTH)
    return length, nxt


def read_value_data(
    buf: bytes,
    pos: Cursor,
    kind: RegistryValueKind,
    length: int,
    *,
    strict: bool = True,
) -> Tuple[object, Cursor]:
    """
    Payload of `kind`. Nothing is read when the declared length is zero.

    DWORD and QWORD always consume 4 and 8 bytes; every other kind consumes
    the declared length.
    """
    if length <= 0:
        return None, pos

    if kind is RegistryValueKind.NONE:
        raise UnsupportedValueType(
            msg=f"value type {kind.reg_name} cannot carry a {length}-byte payload",
            offset=pos,
        ).with_context(value_type=kind.reg_name)

    codec = codec_for(kind)
    size = codec.fixed_width if codec.fixed_width is not None else length
    if len(buf) - pos < size:
        raise _malformed(
            f"value data truncated: need {size} bytes, {len(buf) - pos} left",
            pos,
            DecodeState.READ_VALUE_DATA,
        )

    raw = bytes(buf[pos : pos + size])
    return decode_value(kind, raw, offset=pos, strict=strict), pos + size


def read_close_bracket(buf: bytes, pos: Cursor) -> Cursor:
    end = _find_char(buf, CLOSE_BRACKET, pos)
    if end < 0:
        raise _malformed("missing closing ']'", pos, DecodeState.EXPECT_CLOSE_BRACKET)
    return end + CHAR_WIDTH


def decode_entry(buf: bytes, pos: Cursor, *, strict: bool = True) -> Tuple[PolicyRecord, Cursor]:
    """Decode the entry starting at `pos`; returns (record, cursor after ']')."""
    start = pos
    pos = read_open_bracket(buf, pos)
    key_name, pos = read_name(buf, pos, DecodeState.READ_KEY_NAME)
    if not key_name:
        raise _malformed("empty key name", start, DecodeState.READ_KEY_NAME)
    value_name, pos = read_name(buf, pos, DecodeState.READ_VALUE_NAME)
    kind, pos = read_value_type(buf, pos)
    length, pos = read_value_length(buf, pos)
    data, pos = read_value_data(buf, pos, kind, length, strict=strict)
    pos = read_close_bracket(buf, pos)

    return PolicyRecord.from_wire(key_name, value_name, kind, data, length), pos


def encode_entry(record: PolicyRecord) -> bytes:
    """Serialize one record as a bracketed entry."""
    data = encode_value(record.value_type, record.value_data)
    return b"".join(
        (
            OPEN_BRACKET,
            (record.key_name + NUL).encode(TEXT_ENCODING, errors="surrogatepass"),
            SEMICOLON,
            (record.value_name + NUL).encode(TEXT_ENCODING, errors="surrogatepass"),
            SEMICOLON,
            encode_i32(int(record.value_type)),
            SEMICOLON,
            encode_i32(len(data)),
            SEMICOLON,
            data,
            CLOSE_BRACKET,
        )
    )
