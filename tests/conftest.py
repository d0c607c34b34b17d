# SPDX-License-Identifier: LGPL-3.0-or-later
import struct
import sys
from pathlib import Path

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from gpregpol import PolicyRecord, RegistryValueKind  # noqa: E402

HEADER = b"PReg\x01\x00\x00\x00"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O beyond tmp_path")


def raw_entry(key: str, name: str, type_code: int, data: bytes, *, declared_len=None) -> bytes:
    """Hand-assembled entry bytes, independent of the encoder under test."""
    u = lambda s: s.encode("utf-16-le")  # noqa: E731
    length = len(data) if declared_len is None else declared_len
    return (
        u("[") + u(key + "\0") + u(";") + u(name + "\0") + u(";")
        + struct.pack("<i", type_code) + u(";")
        + struct.pack("<i", length) + u(";")
        + data + u("]")
    )


@pytest.fixture
def make_entry():
    return raw_entry


@pytest.fixture
def header_bytes():
    return HEADER


@pytest.fixture
def sample_records():
    K = RegistryValueKind
    return [
        PolicyRecord(r"Software\Policies\Test", "MyValue", K.SZ, "hello"),
        PolicyRecord(r"Software\Policies\Test", "Path", K.EXPAND_SZ, r"%SystemRoot%\System32"),
        PolicyRecord(r"Software\Policies\Test", "Flag", K.DWORD, 1),
        PolicyRecord(r"Software\Policies\Test", "Big", K.QWORD, 2**40 + 5),
        PolicyRecord(r"Software\Policies\Test\Lists", "Servers", K.MULTI_SZ, ["a", "b", ""]),
        PolicyRecord(r"Software\Policies\Test\Blobs", "Blob", K.BINARY, bytes(range(256))),
        PolicyRecord(r"Software\Policies\Test", "**del.Old", K.SZ, " "),
        PolicyRecord(r"Software\Policies\Test\Empty", "", K.NONE),
    ]
