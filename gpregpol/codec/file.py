# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/codec/file.py
"""
Whole-file Registry.pol codec.

The codec works on in-memory buffers only; reading and writing files is done
by gpregpol.files.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional, Tuple

from ..core.logger import Log, get_logger
from ..model import PolicyRecord
from .constants import HEADER_SIZE, TRAILING_SLACK
from .entry import decode_entry, encode_entry
from .header import emit_header, validate_header


class DecodeResult(NamedTuple):
    records: List[PolicyRecord]
    consumed: int


def _walk(buf: bytes, strict: bool) -> Iterator[Tuple[PolicyRecord, int, int]]:
    validate_header(buf)
    pos = HEADER_SIZE
    while len(buf) - pos > TRAILING_SLACK:
        record, nxt = decode_entry(buf, pos, strict=strict)
        yield record, pos, nxt
        pos = nxt


def iter_entries(buf: bytes, *, strict: bool = True) -> Iterator[Tuple[PolicyRecord, int]]:
    """
    Yield (record, offset) for each entry after validating the header.

    Entries are parsed while more than TRAILING_SLACK bytes remain. The first
    malformed entry raises; nothing after it is yielded.
    """
    for record, offset, _ in _walk(buf, strict):
        yield record, offset


def decode(buf: bytes, *, strict: bool = True, logger: Optional[logging.Logger] = None) -> DecodeResult:
    """Decode a complete Registry.pol buffer into its records."""
    log = get_logger(logger)
    records: List[PolicyRecord] = []
    consumed = HEADER_SIZE

    for record, offset, consumed in _walk(memoryview(buf), strict):
        Log.trace(log, "entry @%d: %s (%s)", offset, record.path, record.value_type.reg_name)
        records.append(record)

    log.debug("Decoded %d entries (%d of %d bytes)", len(records), consumed, len(buf))
    return DecodeResult(records, consumed)


def encode(records: Iterable[PolicyRecord], *, logger: Optional[logging.Logger] = None) -> bytes:
    """Header followed by every record in input order."""
    log = get_logger(logger)
    parts = [emit_header()]
    parts.extend(encode_entry(record) for record in records)
    out = b"".join(parts)
    log.debug("Encoded %d entries (%d bytes)", len(parts) - 1, len(out))
    return out
