# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from gpregpol import PolicyRecord, RegistryValueKind
from gpregpol.codec.entry import encode_entry

K = RegistryValueKind


@pytest.mark.unit
class TestEncodeEntry:
    def test_matches_hand_built_bytes(self, make_entry):
        rec = PolicyRecord(r"Software\Policies\Test", "MyValue", K.SZ, "hello")
        assert encode_entry(rec) == make_entry(r"Software\Policies\Test", "MyValue", 1, "hello\0".encode("utf-16-le"))

    def test_dword_layout(self, make_entry):
        rec = PolicyRecord("K", "N", K.DWORD, 0xFFFFFFFF)
        assert encode_entry(rec) == make_entry("K", "N", 4, b"\xff\xff\xff\xff")

    def test_none_has_zero_size(self, make_entry):
        assert encode_entry(PolicyRecord("K", "", K.NONE)) == make_entry("K", "", 0, b"")

    def test_binary_is_not_text_encoded(self, make_entry):
        blob = b"\x80\x81\xff\x00"
        assert encode_entry(PolicyRecord("K", "B", K.BINARY, blob)) == make_entry("K", "B", 3, blob)

    def test_alias_type_writes_canonical_code(self, make_entry):
        rec = PolicyRecord("K", "N", K.QWORD_LITTLE_ENDIAN, 3)
        assert encode_entry(rec) == make_entry("K", "N", 11, (3).to_bytes(8, "little"))

    def test_idempotent(self):
        rec = PolicyRecord("K", "M", K.MULTI_SZ, ["x", "y"])
        assert encode_entry(rec) == encode_entry(rec)
