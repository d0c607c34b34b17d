# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/codec/header.py
from __future__ import annotations

import struct

from ..core.exceptions import HeaderError
from .constants import FORMAT_VERSION, HEADER_SIZE, SIGNATURE_TEXT, SIGNATURE_VALUE
from .integers import decode_le_int

_HEADER = struct.Struct("<II")


def emit_header() -> bytes:
    """8-byte header: signature then version, both little-endian uint32."""
    return _HEADER.pack(SIGNATURE_VALUE, FORMAT_VERSION)


def validate_header(buf: bytes) -> None:
    """Raise HeaderError unless `buf` starts with a valid Registry.pol header."""
    if len(buf) < HEADER_SIZE:
        raise HeaderError(
            msg=f"file too short for a Registry.pol header ({len(buf)} bytes)",
            offset=0,
            kind="invalid_signature",
        )

    sig = bytes(buf[:4]).decode("ascii", errors="replace")
    if sig != SIGNATURE_TEXT:
        raise HeaderError(msg=f"invalid signature {sig!r}, expected {SIGNATURE_TEXT!r}", offset=0, kind="invalid_signature")

    version = decode_le_int(bytes(buf[4:8]))
    if version != FORMAT_VERSION:
        raise HeaderError(msg=f"unsupported version {version}, expected {FORMAT_VERSION}", offset=4, kind="invalid_version")
