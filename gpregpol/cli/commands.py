# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/cli/commands.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from ..codec.constants import OPAQUE_KINDS, TEXT_KINDS, RegistryValueKind
from ..core.exceptions import InvalidRecord, PolFileError
from ..files import append_records, read_pol_file, remove_records, write_pol_file
from ..model import PolicyRecord
from ..policy import find_records
from ..serialize import dumps_records, loads_records

K = RegistryValueKind


def coerce_cli_data(kind: RegistryValueKind, values: Optional[List[str]]):
    """Turn repeated --data strings into value data for `kind`."""
    if not values:
        return [] if kind is K.MULTI_SZ else None
    if kind is K.MULTI_SZ:
        return list(values)
    if len(values) > 1:
        raise InvalidRecord(msg=f"{kind.reg_name} takes a single --data value")

    raw = values[0]
    if kind in TEXT_KINDS:
        return raw
    if kind in (K.DWORD, K.QWORD):
        try:
            return int(raw, 0)
        except ValueError as e:
            raise InvalidRecord(msg=f"{kind.reg_name} data must be an integer: {raw!r}", cause=e) from e
    if kind is K.BINARY or kind in OPAQUE_KINDS:
        cleaned = raw.replace(":", "").replace(" ", "")
        try:
            return bytes.fromhex(cleaned)
        except ValueError as e:
            raise InvalidRecord(msg=f"{kind.reg_name} data must be hex: {raw!r}", cause=e) from e
    raise InvalidRecord(msg=f"{kind.reg_name} takes no data")


def _display(record: PolicyRecord) -> str:
    data = record.value_data
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.hex(" ")
    if isinstance(data, list):
        return " | ".join(data)
    if isinstance(data, int):
        return f"{data} (0x{data & (0xFFFFFFFF if record.value_type is K.DWORD else 0xFFFFFFFFFFFFFFFF):X})"
    return str(data)


def records_table(records: List[PolicyRecord], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Key", overflow="fold")
    table.add_column("Value")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Data", overflow="fold")
    for r in records:
        table.add_row(r.key_name, r.value_name, r.value_type.reg_name, str(r.value_length), _display(r))
    return table


def cmd_show(args: argparse.Namespace, logger: logging.Logger) -> int:
    records = read_pol_file(args.file, strict=args.strict, logger=logger)
    if args.key is not None:
        records = find_records(records, args.key, args.name)
    if args.as_json:
        sys.stdout.write(dumps_records(records) + "\n")
    else:
        Console().print(records_table(records, f"{args.file} ({len(records)} entries)"))
    return 0


def cmd_export(args: argparse.Namespace, logger: logging.Logger) -> int:
    records = read_pol_file(args.file, strict=args.strict, logger=logger)
    text = dumps_records(records) + "\n"
    if args.output == "-":
        sys.stdout.write(text)
    else:
        out = Path(args.output)
        try:
            out.write_text(text, encoding="utf-8")
        except OSError as e:
            raise PolFileError(msg=f"cannot write {out}: {e.strerror or e}", cause=e) from e
        logger.info("Exported %d records to %s", len(records), out)
    return 0


def cmd_import(args: argparse.Namespace, logger: logging.Logger) -> int:
    src = Path(args.input)
    try:
        text = sys.stdin.read() if args.input == "-" else src.read_text(encoding="utf-8")
    except OSError as e:
        raise PolFileError(msg=f"cannot read {src}: {e.strerror or e}", cause=e) from e
    records = loads_records(text)
    write_pol_file(args.output, records, force=bool(args.force), logger=logger)
    return 0


def cmd_set(args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        kind = RegistryValueKind.parse(args.value_type)
    except ValueError as e:
        raise InvalidRecord(msg=str(e), cause=e) from e
    record = PolicyRecord(
        key_name=args.key,
        value_name=args.name,
        value_type=kind,
        value_data=coerce_cli_data(kind, args.data),
    )
    append_records(args.file, [record], create=bool(args.create), strict=args.strict, logger=logger)
    return 0


def cmd_remove(args: argparse.Namespace, logger: logging.Logger) -> int:
    removed = remove_records(args.file, args.key, args.name, strict=args.strict, logger=logger)
    logger.info("Removed %d record(s)", removed)
    return 0 if removed else 1


COMMANDS: Dict[str, Callable[[argparse.Namespace, logging.Logger], int]] = {
    "show": cmd_show,
    "export": cmd_export,
    "import": cmd_import,
    "set": cmd_set,
    "remove": cmd_remove,
}


def run(args: argparse.Namespace, logger: logging.Logger) -> int:
    return COMMANDS[args.command](args, logger)
