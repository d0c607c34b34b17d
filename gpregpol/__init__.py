# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/__init__.py
r"""
gpregpol - Group Policy Registry.pol codec

Converts between lists of registry policy settings and the binary
Registry.pol layout ("PReg" header followed by bracketed entries).

Usage as a library:

    from gpregpol import PolicyRecord, RegistryValueKind, decode, encode

    rec = PolicyRecord(
        key_name=r"Software\Policies\Test",
        value_name="MyValue",
        value_type=RegistryValueKind.SZ,
        value_data="hello",
    )
    blob = encode([rec])
    records, consumed = decode(blob)

File helpers (read_pol_file, write_pol_file, append_records, remove_records)
live in gpregpol.files.
"""

__version__ = "0.1.0"

from .codec.constants import RegistryValueKind
from .codec.file import DecodeResult, decode, encode, iter_entries
from .core.exceptions import (
    HeaderError,
    InvalidIntegerSize,
    InvalidRecord,
    MalformedEntry,
    ParseError,
    PathConflict,
    PolFileError,
    RegPolError,
    UnsupportedValueType,
)
from .files import append_records, read_pol_file, remove_records, write_pol_file
from .model import PolicyRecord

__all__ = [
    "__version__",

    # Model
    "PolicyRecord",
    "RegistryValueKind",

    # Codec
    "DecodeResult",
    "decode",
    "encode",
    "iter_entries",

    # Files
    "append_records",
    "read_pol_file",
    "remove_records",
    "write_pol_file",

    # Errors
    "HeaderError",
    "InvalidIntegerSize",
    "InvalidRecord",
    "MalformedEntry",
    "ParseError",
    "PathConflict",
    "PolFileError",
    "RegPolError",
    "UnsupportedValueType",
]
