# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import logging

import pytest

from gpregpol import (
    HeaderError,
    PathConflict,
    PolFileError,
    PolicyRecord,
    RegistryValueKind,
    append_records,
    encode,
    read_pol_file,
    remove_records,
    write_pol_file,
)

K = RegistryValueKind


@pytest.mark.unit
class TestReadWrite:
    def test_write_then_read(self, tmp_path, sample_records):
        p = write_pol_file(tmp_path / "Machine" / "Registry.pol", sample_records)
        assert p.read_bytes() == encode(sample_records)
        assert read_pol_file(p) == sample_records

    def test_existing_file_needs_force(self, tmp_path, sample_records):
        p = tmp_path / "Registry.pol"
        p.write_bytes(b"keep me")
        with pytest.raises(PathConflict):
            write_pol_file(p, sample_records)
        assert p.read_bytes() == b"keep me"

        write_pol_file(p, sample_records, force=True)
        assert read_pol_file(p) == sample_records

    def test_directory_target(self, tmp_path):
        with pytest.raises(PathConflict):
            write_pol_file(tmp_path, [], force=True)

    def test_no_temp_files_left(self, tmp_path, sample_records):
        write_pol_file(tmp_path / "Registry.pol", sample_records)
        assert [p.name for p in tmp_path.iterdir()] == ["Registry.pol"]

    def test_read_missing(self, tmp_path):
        with pytest.raises(PolFileError) as exc_info:
            read_pol_file(tmp_path / "nope.pol")
        assert exc_info.value.context["path"].endswith("nope.pol")

    def test_read_garbage(self, tmp_path):
        p = tmp_path / "bad.pol"
        p.write_bytes(b"regf\x01\x00\x00\x00")
        with pytest.raises(HeaderError):
            read_pol_file(p)


@pytest.mark.unit
class TestEdit:
    def test_append_creates(self, tmp_path):
        p = tmp_path / "Registry.pol"
        rec = PolicyRecord("K", "N", K.DWORD, 1)
        assert append_records(p, [rec]) == [rec]
        assert read_pol_file(p) == [rec]

    def test_append_without_create(self, tmp_path):
        with pytest.raises(PolFileError):
            append_records(tmp_path / "Registry.pol", [PolicyRecord("K", "N", K.DWORD, 1)], create=False)

    def test_append_replaces_matching(self, tmp_path, sample_records):
        p = write_pol_file(tmp_path / "Registry.pol", sample_records)
        append_records(p, [PolicyRecord(r"software\policies\test", "myvalue", K.SZ, "bye")])
        records = read_pol_file(p)
        assert len(records) == len(sample_records)
        assert records[0].value_data == "bye"

    def test_remove(self, tmp_path, sample_records):
        p = write_pol_file(tmp_path / "Registry.pol", sample_records)
        assert remove_records(p, r"Software\Policies\Test", "Flag") == 1
        assert remove_records(p, r"Software\Policies\Test", "Flag") == 0
        assert len(read_pol_file(p)) == len(sample_records) - 1


@pytest.mark.unit
class TestLogging:
    def test_messages_carry_file_context(self, tmp_path):
        logger = logging.getLogger("gpregpol.test.files")
        logger.propagate = False
        logger.setLevel(logging.DEBUG)
        seen = []
        handler = logging.Handler()
        handler.emit = seen.append
        logger.addHandler(handler)
        p = tmp_path / "Registry.pol"
        try:
            append_records(p, [PolicyRecord("K", "N", K.DWORD, 1)], logger=logger)
            remove_records(p, "K", logger=logger)
        finally:
            logger.removeHandler(handler)

        assert seen
        assert {r.ctx["file"] for r in seen} == {str(p)}
        assert any(r.getMessage().endswith("Updating Registry.pol") and r.ctx["added"] == 1 for r in seen)
