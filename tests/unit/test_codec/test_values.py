# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for per-type value payload coding."""
from __future__ import annotations

import pytest

from gpregpol.codec.constants import OPAQUE_KINDS, RegistryValueKind
from gpregpol.codec.values import CODECS, check_value, decode_value, encode_value
from gpregpol.core.exceptions import InvalidRecord, MalformedEntry, UnsupportedValueType

K = RegistryValueKind


@pytest.mark.unit
class TestValueKind:
    def test_wire_codes(self):
        assert [int(k) for k in K] == list(range(12))

    def test_aliases_resolve_to_one_member(self):
        assert K.DWORD_LITTLE_ENDIAN is K.DWORD
        assert K.QWORD_LITTLE_ENDIAN is K.QWORD
        assert K(4).name == "DWORD"
        assert K(11).name == "QWORD"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("REG_SZ", K.SZ),
            ("reg_multi_sz", K.MULTI_SZ),
            ("DWORD_LITTLE_ENDIAN", K.DWORD),
            ("REG_QWORD_LITTLE_ENDIAN", K.QWORD),
            (7, K.MULTI_SZ),
            ("3", K.BINARY),
            (K.LINK, K.LINK),
        ],
    )
    def test_parse(self, raw, expected):
        assert K.parse(raw) is expected

    @pytest.mark.parametrize("raw", ["REG_FOO", 12, -1, True, None])
    def test_parse_rejects(self, raw):
        with pytest.raises(ValueError):
            K.parse(raw)

    def test_reg_name(self):
        assert K.EXPAND_SZ.reg_name == "REG_EXPAND_SZ"
        assert K.DWORD_LITTLE_ENDIAN.reg_name == "REG_DWORD"

    def test_every_kind_has_a_codec(self):
        assert set(CODECS) == set(K)


@pytest.mark.unit
class TestTextValues:
    def test_sz_encode_adds_one_null(self):
        assert encode_value(K.SZ, "hi") == "hi\0".encode("utf-16-le")

    def test_sz_decode_strips_one_null(self):
        assert decode_value(K.SZ, "hi\0".encode("utf-16-le")) == "hi"
        assert decode_value(K.EXPAND_SZ, "x\0\0".encode("utf-16-le")) == "x\0"

    def test_sz_without_terminator(self):
        assert decode_value(K.SZ, "bare".encode("utf-16-le")) == "bare"

    def test_non_ascii_text(self):
        text = "Größe – 設定 🙂"
        assert decode_value(K.SZ, encode_value(K.SZ, text)) == text

    def test_odd_length_text_is_malformed(self):
        with pytest.raises(MalformedEntry) as exc_info:
            decode_value(K.SZ, b"a\x00b", offset=40)
        assert exc_info.value.offset == 40


@pytest.mark.unit
class TestBinaryAndIntegers:
    def test_binary_verbatim(self):
        blob = b"\x00\xff\xfe]\x00;\x00\xd8\x00"
        assert encode_value(K.BINARY, blob) == blob
        assert decode_value(K.BINARY, blob) == blob

    def test_binary_accepts_bytearray(self):
        assert encode_value(K.BINARY, bytearray(b"\x01\x02")) == b"\x01\x02"

    def test_dword(self):
        assert encode_value(K.DWORD, 0xFFFFFFFF) == b"\xff\xff\xff\xff"
        assert decode_value(K.DWORD, b"\xff\xff\xff\xff") == -1
        assert decode_value(K.DWORD, b"\x2a\x00\x00\x00") == 42

    def test_qword(self):
        assert encode_value(K.QWORD, 1) == b"\x01" + b"\x00" * 7
        assert decode_value(K.QWORD, b"\x00\x00\x00\x00\x01\x00\x00\x00") == 2**32


@pytest.mark.unit
class TestEmptyAndOpaque:
    @pytest.mark.parametrize("kind", list(K))
    def test_none_encodes_empty(self, kind):
        assert encode_value(kind, None) == b""

    def test_reg_none_rejects_data(self):
        with pytest.raises(InvalidRecord):
            check_value(K.NONE, b"\x00")

    @pytest.mark.parametrize("kind", sorted(OPAQUE_KINDS))
    def test_opaque_strict_raises(self, kind):
        with pytest.raises(UnsupportedValueType) as exc_info:
            decode_value(kind, b"\x01\x02", offset=10)
        assert exc_info.value.offset == 10
        assert exc_info.value.kind == "unsupported_value_type"

    @pytest.mark.parametrize("kind", sorted(OPAQUE_KINDS))
    def test_opaque_lenient_keeps_bytes(self, kind):
        assert decode_value(kind, b"\x01\x02", strict=False) == b"\x01\x02"
        assert encode_value(kind, b"\x01\x02") == b"\x01\x02"


@pytest.mark.unit
class TestShapeChecks:
    @pytest.mark.parametrize(
        "kind, data",
        [
            (K.SZ, 5),
            (K.EXPAND_SZ, b"x"),
            (K.MULTI_SZ, "not a list"),
            (K.MULTI_SZ, ["ok", 3]),
            (K.MULTI_SZ, ["bad\0item"]),
            (K.BINARY, "text"),
            (K.DWORD, "1"),
            (K.DWORD, False),
            (K.DWORD, 2**32),
            (K.QWORD, 2**64),
            (K.LINK, "text"),
        ],
    )
    def test_mismatch(self, kind, data):
        with pytest.raises(InvalidRecord):
            check_value(kind, data)

    def test_tuple_normalized_to_list(self):
        assert check_value(K.MULTI_SZ, ("a", "b")) == ["a", "b"]

    @pytest.mark.parametrize(
        "kind, given, stored",
        [
            (K.DWORD, 0xFFFFFFFF, -1),
            (K.DWORD, 0x80000000, -(2**31)),
            (K.DWORD, 0x7FFFFFFF, 0x7FFFFFFF),
            (K.QWORD, 0xFFFFFFFFFFFFFFFF, -1),
            (K.QWORD, 2**40, 2**40),
        ],
    )
    def test_unsigned_integers_stored_signed(self, kind, given, stored):
        assert check_value(kind, given) == stored
