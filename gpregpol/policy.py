# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/policy.py
"""Operations over ordered lists of PolicyRecord (registry-style matching)."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .model import PolicyRecord


def find_records(records: Iterable[PolicyRecord], key_name: str, value_name: Optional[str] = None) -> List[PolicyRecord]:
    return [r for r in records if r.matches(key_name, value_name)]


def upsert_records(records: Sequence[PolicyRecord], updates: Iterable[PolicyRecord]) -> Tuple[List[PolicyRecord], int, int]:
    """
    Replace records with the same key/value name in place, append the rest.

    Returns (new list, replaced count, appended count). Existing order is kept.
    """
    out = list(records)
    replaced = appended = 0
    for upd in updates:
        for i, cur in enumerate(out):
            if cur.matches(upd.key_name, upd.value_name):
                out[i] = upd
                replaced += 1
                break
        else:
            out.append(upd)
            appended += 1
    return out, replaced, appended


def remove_matching(
    records: Iterable[PolicyRecord], key_name: str, value_name: Optional[str] = None
) -> Tuple[List[PolicyRecord], int]:
    """Drop records under `key_name` (and `value_name` when given). Returns (kept, removed count)."""
    kept: List[PolicyRecord] = []
    removed = 0
    for r in records:
        if r.matches(key_name, value_name):
            removed += 1
        else:
            kept.append(r)
    return kept, removed
