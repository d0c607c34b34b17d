# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/codec/values.py
"""
Per-type payload coding for Registry.pol value data.

Every RegistryValueKind has an explicit entry in the codec table; adding a
kind without a codec fails at import time.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.exceptions import InvalidRecord, MalformedEntry, UnsupportedValueType
from .constants import NUL, OPAQUE_KINDS, TEXT_ENCODING, RegistryValueKind
from .integers import decode_le_int, encode_le_int, to_signed
from .multistring import join_multi_sz, split_multi_sz

ValueData = Union[None, str, List[str], bytes, int]

K = RegistryValueKind


def _decode_text(raw: bytes, offset: Optional[int]) -> str:
    try:
        return raw.decode(TEXT_ENCODING, errors="surrogatepass")
    except UnicodeDecodeError as e:
        raise MalformedEntry(msg=f"text payload is not valid UTF-16LE ({len(raw)} bytes)", cause=e, offset=offset) from e


def _encode_text(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, errors="surrogatepass")


# ---------------------------------------------------------------------------
# Decoders: raw payload bytes -> value data
# ---------------------------------------------------------------------------


def _dec_sz(raw: bytes, offset: Optional[int]) -> str:
    text = _decode_text(raw, offset)
    return text[:-1] if text.endswith(NUL) else text


def _dec_multi_sz(raw: bytes, offset: Optional[int]) -> List[str]:
    return split_multi_sz(_decode_text(raw, offset))


def _dec_binary(raw: bytes, offset: Optional[int]) -> bytes:
    return bytes(raw)


def _dec_int(raw: bytes, offset: Optional[int]) -> int:
    return decode_le_int(raw)


def _dec_none(raw: bytes, offset: Optional[int]) -> None:
    return None


def _dec_opaque(raw: bytes, offset: Optional[int]) -> bytes:
    return bytes(raw)


# ---------------------------------------------------------------------------
# Encoders: value data -> raw payload bytes (None always encodes to b"")
# ---------------------------------------------------------------------------


def _enc_sz(data: str) -> bytes:
    return _encode_text(data + NUL)


def _enc_multi_sz(data: List[str]) -> bytes:
    return _encode_text(join_multi_sz(data))


def _enc_binary(data: bytes) -> bytes:
    return bytes(data)


def _enc_dword(data: int) -> bytes:
    return encode_le_int(data, 4)


def _enc_qword(data: int) -> bytes:
    return encode_le_int(data, 8)


def _enc_none(data: None) -> bytes:
    return b""


# ---------------------------------------------------------------------------
# Shape checks: value data -> normalized value data
# ---------------------------------------------------------------------------


def _chk_str(kind: RegistryValueKind, data: Any) -> str:
    if not isinstance(data, str):
        raise InvalidRecord(msg=f"{kind.reg_name} expects str, got {type(data).__name__}")
    return data


def _chk_str_list(kind: RegistryValueKind, data: Any) -> List[str]:
    if isinstance(data, (str, bytes)) or not isinstance(data, (list, tuple)):
        raise InvalidRecord(msg=f"{kind.reg_name} expects a list of str, got {type(data).__name__}")
    for item in data:
        if not isinstance(item, str):
            raise InvalidRecord(msg=f"{kind.reg_name} items must be str, got {type(item).__name__}")
        if NUL in item:
            raise InvalidRecord(msg=f"{kind.reg_name} items cannot contain NUL characters")
    return list(data)


def _chk_bytes(kind: RegistryValueKind, data: Any) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidRecord(msg=f"{kind.reg_name} expects bytes, got {type(data).__name__}")
    return bytes(data)


def _int_checker(width: int) -> Callable[[RegistryValueKind, Any], int]:
    bits = width * 8

    def check(kind: RegistryValueKind, data: Any) -> int:
        if isinstance(data, bool) or not isinstance(data, int):
            raise InvalidRecord(msg=f"{kind.reg_name} expects int, got {type(data).__name__}")
        if data < -(1 << (bits - 1)) or data >= (1 << bits):
            raise InvalidRecord(msg=f"{kind.reg_name} value {data} out of range")
        # stored signed, the way decode_le_int reads it back
        return to_signed(data & ((1 << bits) - 1), bits)

    return check


def _chk_none(kind: RegistryValueKind, data: Any) -> None:
    raise InvalidRecord(msg=f"{kind.reg_name} carries no data, got {type(data).__name__}")


@dataclass(frozen=True)
class ValueCodec:
    decode: Callable[[bytes, Optional[int]], ValueData]
    encode: Callable[[Any], bytes]
    check: Callable[[RegistryValueKind, Any], ValueData]
    # Payload bytes consumed regardless of the declared length (DWORD/QWORD).
    fixed_width: Optional[int] = None
    # No typed representation; payload only kept as raw bytes.
    opaque: bool = False


_OPAQUE = ValueCodec(decode=_dec_opaque, encode=_enc_binary, check=_chk_bytes, opaque=True)

CODECS: Dict[RegistryValueKind, ValueCodec] = {
    K.NONE: ValueCodec(decode=_dec_none, encode=_enc_none, check=_chk_none),
    K.SZ: ValueCodec(decode=_dec_sz, encode=_enc_sz, check=_chk_str),
    K.EXPAND_SZ: ValueCodec(decode=_dec_sz, encode=_enc_sz, check=_chk_str),
    K.BINARY: ValueCodec(decode=_dec_binary, encode=_enc_binary, check=_chk_bytes),
    K.DWORD: ValueCodec(decode=_dec_int, encode=_enc_dword, check=_int_checker(4), fixed_width=4),
    K.DWORD_BIG_ENDIAN: _OPAQUE,
    K.LINK: _OPAQUE,
    K.MULTI_SZ: ValueCodec(decode=_dec_multi_sz, encode=_enc_multi_sz, check=_chk_str_list),
    K.RESOURCE_LIST: _OPAQUE,
    K.FULL_RESOURCE_DESCRIPTOR: _OPAQUE,
    K.RESOURCE_REQUIREMENTS_LIST: _OPAQUE,
    K.QWORD: ValueCodec(decode=_dec_int, encode=_enc_qword, check=_int_checker(8), fixed_width=8),
}

_missing = [k.reg_name for k in RegistryValueKind if k not in CODECS]
if _missing:
    raise RuntimeError(f"no value codec for: {', '.join(_missing)}")
if {k for k, v in CODECS.items() if v.opaque} != set(OPAQUE_KINDS):
    raise RuntimeError("opaque codec table disagrees with OPAQUE_KINDS")


def codec_for(kind: RegistryValueKind) -> ValueCodec:
    return CODECS[RegistryValueKind(kind)]


def check_value(kind: RegistryValueKind, data: Any) -> ValueData:
    """Validate `data` against `kind` and return its normalized form."""
    if data is None:
        return None
    return codec_for(kind).check(kind, data)


def decode_value(
    kind: RegistryValueKind,
    raw: bytes,
    *,
    offset: Optional[int] = None,
    strict: bool = True,
) -> ValueData:
    """
    Decode a payload already cut to its final length.

    Opaque kinds raise UnsupportedValueType when `strict`, otherwise the raw
    bytes are returned unchanged.
    """
    codec = codec_for(kind)
    if codec.opaque and strict:
        raise UnsupportedValueType(
            msg=f"value type {kind.reg_name} has no data representation ({len(raw)} payload bytes)",
            offset=offset,
        ).with_context(value_type=kind.reg_name)
    return codec.decode(raw, offset)


def encode_value(kind: RegistryValueKind, data: ValueData) -> bytes:
    """Encode value data to payload bytes; None encodes to an empty payload."""
    if data is None:
        return b""
    codec = codec_for(kind)
    return codec.encode(codec.check(kind, data))
