# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/codec/constants.py
"""
Registry.pol format constants and the registry value kind enumeration.

Layout (little-endian integers, UTF-16LE text):

    offset 0: 4 bytes  signature "PReg"
    offset 4: 4 bytes  version (= 1)
    offset 8: entries to EOF

    entry: [ KeyName NUL ; ValueName NUL ; Type(i32) ; Length(i32) ; Data ]
"""
from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Union

TEXT_ENCODING = "utf-16-le"

SIGNATURE_TEXT = "PReg"
SIGNATURE_VALUE = 0x67655250  # "PReg" read as a little-endian uint32
FORMAT_VERSION = 1
HEADER_SIZE = 8

NUL = "\x00"
OPEN_BRACKET = "[".encode(TEXT_ENCODING)
CLOSE_BRACKET = "]".encode(TEXT_ENCODING)
SEMICOLON = ";".encode(TEXT_ENCODING)
NUL_BYTES = NUL.encode(TEXT_ENCODING)
CHAR_WIDTH = len(SEMICOLON)

# Bytes of tail the file decoder tolerates without trying to parse another entry.
TRAILING_SLACK = CHAR_WIDTH


class RegistryValueKind(IntEnum):
    """Registry value types; the integer is the wire code."""

    NONE = 0
    SZ = 1
    EXPAND_SZ = 2
    BINARY = 3
    DWORD = 4
    DWORD_LITTLE_ENDIAN = 4
    DWORD_BIG_ENDIAN = 5
    LINK = 6
    MULTI_SZ = 7
    RESOURCE_LIST = 8
    FULL_RESOURCE_DESCRIPTOR = 9
    RESOURCE_REQUIREMENTS_LIST = 10
    QWORD = 11
    QWORD_LITTLE_ENDIAN = 11

    @property
    def reg_name(self) -> str:
        return f"REG_{self.name}"

    @classmethod
    def parse(cls, value: Union["RegistryValueKind", int, str]) -> "RegistryValueKind":
        """
        Resolve a member from a wire code, a member, or a name such as
        "REG_DWORD", "dword" or "QWORD_LITTLE_ENDIAN".
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"not a registry value kind: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            name = value.strip().upper()
            if name.startswith("REG_"):
                name = name[4:]
            name = KIND_ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                pass
            if name.isdigit():
                return cls(int(name))
            raise ValueError(f"unknown registry value kind: {value!r}")
        raise ValueError(f"not a registry value kind: {value!r}")


# Alternate spellings; each resolves to exactly one canonical member name.
KIND_ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "DWORD_LITTLE_ENDIAN": "DWORD",
        "QWORD_LITTLE_ENDIAN": "QWORD",
        "DWORD_LE": "DWORD",
        "QWORD_LE": "QWORD",
        "DWORD_BE": "DWORD_BIG_ENDIAN",
    }
)

TEXT_KINDS = frozenset({RegistryValueKind.SZ, RegistryValueKind.EXPAND_SZ})

# Kinds with no typed data representation.
OPAQUE_KINDS = frozenset(
    {
        RegistryValueKind.DWORD_BIG_ENDIAN,
        RegistryValueKind.LINK,
        RegistryValueKind.RESOURCE_LIST,
        RegistryValueKind.FULL_RESOURCE_DESCRIPTOR,
        RegistryValueKind.RESOURCE_REQUIREMENTS_LIST,
    }
)
