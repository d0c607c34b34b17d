# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/serialize.py
"""
JSON interchange for PolicyRecord.

    {"key": "Software\\Policies\\X", "name": "Flag", "type": "REG_DWORD", "data": 1}

BINARY and opaque payloads are base64 text; MULTI_SZ is a JSON list.
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, Iterable, List, Mapping

from .codec.constants import OPAQUE_KINDS, RegistryValueKind
from .core.exceptions import InvalidRecord
from .model import PolicyRecord

_BYTES_KINDS = OPAQUE_KINDS | {RegistryValueKind.BINARY}


def record_to_dict(record: PolicyRecord) -> Dict[str, Any]:
    data: Any = record.value_data
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("ascii")
    return {
        "key": record.key_name,
        "name": record.value_name,
        "type": record.value_type.reg_name,
        "data": data,
    }


def record_from_dict(obj: Mapping[str, Any]) -> PolicyRecord:
    if not isinstance(obj, Mapping):
        raise InvalidRecord(msg=f"record must be an object, got {type(obj).__name__}")
    try:
        key, kind_s = obj["key"], obj["type"]
    except KeyError as e:
        raise InvalidRecord(msg=f"record is missing field {e.args[0]!r}", cause=e) from e

    try:
        kind = RegistryValueKind.parse(kind_s)
    except ValueError as e:
        raise InvalidRecord(msg=str(e), cause=e) from e

    data = obj.get("data")
    if kind in _BYTES_KINDS and isinstance(data, str):
        try:
            data = base64.b64decode(data, validate=True)
        except binascii.Error as e:
            raise InvalidRecord(msg=f"{kind.reg_name} data is not valid base64", cause=e) from e

    return PolicyRecord(key_name=key, value_name=obj.get("name") or "", value_type=kind, value_data=data)


def dumps_records(records: Iterable[PolicyRecord], *, indent: int = 2) -> str:
    return json.dumps([record_to_dict(r) for r in records], indent=indent, ensure_ascii=False)


def loads_records(text: str) -> List[PolicyRecord]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidRecord(msg=f"invalid JSON: {e}", cause=e) from e
    if not isinstance(raw, list):
        raise InvalidRecord(msg="expected a JSON list of records")
    return [record_from_dict(item) for item in raw]
