# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import json

import pytest

from gpregpol import InvalidRecord, PolicyRecord, RegistryValueKind
from gpregpol.serialize import dumps_records, loads_records, record_from_dict, record_to_dict

K = RegistryValueKind


@pytest.mark.unit
class TestJsonRecords:
    def test_round_trip(self, sample_records):
        assert loads_records(dumps_records(sample_records)) == sample_records

    def test_shape(self):
        d = record_to_dict(PolicyRecord("K", "B", K.BINARY, b"\x00\x01"))
        assert d == {"key": "K", "name": "B", "type": "REG_BINARY", "data": "AAE="}

    def test_multi_sz_is_list(self):
        text = dumps_records([PolicyRecord("K", "M", K.MULTI_SZ, ["a", ""])])
        assert json.loads(text)[0]["data"] == ["a", ""]

    def test_loose_input(self):
        rec = record_from_dict({"key": "K", "type": "dword", "data": 5})
        assert rec.value_name == ""
        assert rec.value_type is K.DWORD

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            '{"key": "K"}',
            '[{"type": "REG_SZ"}]',
            '[{"key": "K", "type": "REG_NOPE"}]',
            '[{"key": "K", "type": "REG_BINARY", "data": "***"}]',
            '[42]',
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(InvalidRecord):
            loads_records(text)
