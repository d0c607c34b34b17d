# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/core/__init__.py
from .exceptions import (
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
from .logger import Log

__all__ = [
    "HeaderError",
    "InvalidIntegerSize",
    "InvalidRecord",
    "Log",
    "MalformedEntry",
    "ParseError",
    "PathConflict",
    "PolFileError",
    "RegPolError",
    "UnsupportedValueType",
]
