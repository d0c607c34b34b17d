# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/codec/multistring.py
from __future__ import annotations

from typing import List, Sequence

from .constants import NUL


def split_multi_sz(text: str) -> List[str]:
    """
    Split decoded REG_MULTI_SZ text into its items.

    "a\\0b\\0\\0\\0" -> ["a", "b", ""]. Text without any null is treated as
    malformed input and split on whitespace instead.
    """
    if NUL not in text:
        return text.split()

    # list terminator
    if text.endswith(NUL):
        text = text[:-1]

    pieces = text.split(NUL)
    # remainder after the last item's own terminator
    if pieces and pieces[-1] == "":
        pieces.pop()

    return pieces


def join_multi_sz(items: Sequence[str]) -> str:
    """Each item null-terminated, then one more null for the list."""
    return "".join(item + NUL for item in items) + NUL
