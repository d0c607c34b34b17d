# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/files.py
"""
Registry.pol file access.

The codec only sees bytes; this module owns opening, atomic replacement and
the overwrite policy for .pol files.
"""
from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterable, List, Optional, Union

from .codec.file import decode, encode
from .core.exceptions import PathConflict, PolFileError
from .core.logger import Log, get_logger
from .model import PolicyRecord
from .policy import remove_matching, upsert_records

PathLike = Union[str, "os.PathLike[str]"]


@contextmanager
def atomic_write(target_path: Path, *, suffix: str = ".part") -> Generator[Path, None, None]:
    """
    Yield a temp path next to `target_path`; rename it over the target on
    success, remove it on failure.
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(suffix=suffix, prefix=f".{target_path.name}.", dir=str(target_path.parent))
    os.close(fd)
    temp_path = Path(temp_name)
    try:
        yield temp_path
        os.replace(temp_path, target_path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def read_pol_file(path: PathLike, *, strict: bool = True, logger: Optional[logging.Logger] = None) -> List[PolicyRecord]:
    p = Path(path)
    log = Log.bind(get_logger(logger), file=str(p))
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise PolFileError(msg=f"cannot read {p}: {e.strerror or e}", cause=e).with_context(path=str(p)) from e

    log.debug("Read %d bytes", len(raw))
    records, _ = decode(raw, strict=strict, logger=log)
    return records


def write_pol_file(
    path: PathLike,
    records: Iterable[PolicyRecord],
    *,
    force: bool = False,
    logger: Optional[logging.Logger] = None,
) -> Path:
    """Encode `records` to `path`. An existing file is only replaced when `force`."""
    p = Path(path)
    log = Log.bind(get_logger(logger), file=str(p))
    if p.exists() and not force:
        raise PathConflict(msg=f"{p} already exists (use force to overwrite)").with_context(path=str(p))
    if p.is_dir():
        raise PathConflict(msg=f"{p} is a directory").with_context(path=str(p))

    data = encode(records, logger=log)
    try:
        with atomic_write(p) as tmp:
            tmp.write_bytes(data)
    except OSError as e:
        raise PolFileError(msg=f"cannot write {p}: {e.strerror or e}", cause=e).with_context(path=str(p)) from e

    Log.ok(log, f"Wrote {p}", bytes=len(data))
    return p


def append_records(
    path: PathLike,
    records: Iterable[PolicyRecord],
    *,
    create: bool = True,
    strict: bool = True,
    logger: Optional[logging.Logger] = None,
) -> List[PolicyRecord]:
    """
    Add or replace records in an existing .pol file (matching key and value
    name case-insensitively). A missing file is created when `create`.
    """
    p = Path(path)
    log = Log.bind(get_logger(logger), file=str(p))
    if p.exists():
        current = read_pol_file(p, strict=strict, logger=log)
    elif create:
        current = []
    else:
        raise PolFileError(msg=f"{p} does not exist").with_context(path=str(p))

    merged, replaced, appended = upsert_records(current, records)
    Log.step(log, f"Updating {p.name}", replaced=replaced, added=appended)
    write_pol_file(p, merged, force=True, logger=log)
    return merged


def remove_records(
    path: PathLike,
    key_name: str,
    value_name: Optional[str] = None,
    *,
    strict: bool = True,
    logger: Optional[logging.Logger] = None,
) -> int:
    """Remove matching records from a .pol file; returns how many were removed."""
    p = Path(path)
    log = Log.bind(get_logger(logger), file=str(p))
    kept, removed = remove_matching(read_pol_file(p, strict=strict, logger=log), key_name, value_name)
    if removed:
        Log.step(log, f"Removing {removed} record(s) from {p.name}")
        write_pol_file(p, kept, force=True, logger=log)
    else:
        log.info("No records matched %s", key_name if value_name is None else f"{key_name}\\{value_name}")
    return removed
