# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .codec.constants import NUL, RegistryValueKind
from .codec.values import ValueData, check_value, encode_value
from .core.exceptions import InvalidRecord


@dataclass(frozen=True)
class PolicyRecord:
    """
    One Group Policy registry setting.

    `value_length` is the byte length of the encoded data field. It is computed
    from `value_data` when omitted and must match it when given. Decoded
    records keep the length declared in the file (see `from_wire`).
    """

    key_name: str
    value_name: str
    value_type: RegistryValueKind
    value_data: ValueData = None
    value_length: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.key_name, str) or not self.key_name:
            raise InvalidRecord(msg="key name must be a non-empty string")
        if not isinstance(self.value_name, str):
            raise InvalidRecord(msg="value name must be a string")
        for label, name in (("key", self.key_name), ("value", self.value_name)):
            if NUL in name or ";" in name:
                raise InvalidRecord(msg=f"{label} name cannot contain NUL or ';': {name!r}")
        try:
            kind = RegistryValueKind.parse(self.value_type)
        except ValueError as e:
            raise InvalidRecord(msg=str(e), cause=e) from e

        data = check_value(kind, self.value_data)
        object.__setattr__(self, "value_type", kind)
        object.__setattr__(self, "value_data", data)

        encoded = len(encode_value(kind, data))
        if self.value_length is None:
            object.__setattr__(self, "value_length", encoded)
        elif isinstance(self.value_length, bool) or not isinstance(self.value_length, int) or self.value_length < 0:
            raise InvalidRecord(msg=f"invalid value length: {self.value_length!r}")
        elif self.value_length != encoded:
            raise InvalidRecord(
                msg=f"value length {self.value_length} does not match the {encoded}-byte encoded {kind.reg_name} data"
            ).with_context(value_length=self.value_length, encoded_length=encoded)

    @classmethod
    def from_wire(
        cls,
        key_name: str,
        value_name: str,
        value_type: RegistryValueKind,
        value_data: ValueData,
        value_length: int,
    ) -> "PolicyRecord":
        """
        Record as read from a file, keeping the declared length as is.

        The declared length can differ from the re-encoded one: DWORD/QWORD
        payloads are always 4/8 bytes, and text without its terminator gains
        one on encode.
        """
        record = cls(key_name, value_name, value_type, value_data)
        if value_length < 0:
            raise InvalidRecord(msg=f"invalid value length: {value_length!r}")
        object.__setattr__(record, "value_length", value_length)
        return record

    @property
    def path(self) -> str:
        return f"{self.key_name}\\{self.value_name}" if self.value_name else self.key_name

    def matches(self, key_name: str, value_name: Optional[str] = None) -> bool:
        """Registry-style (case-insensitive) match on key and optional value name."""
        if self.key_name.casefold() != key_name.casefold():
            return False
        return value_name is None or self.value_name.casefold() == value_name.casefold()
