#!/usr/bin/env python3
# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Example: Editing a Registry.pol file with the gpregpol library.

This example demonstrates:
- Reading an existing Registry.pol (or starting from nothing)
- Adding or replacing policy values
- Deleting a value with a **del. marker
- Writing the result back atomically

Usage:
    python library_edit_policy.py /path/to/Machine/Registry.pol
"""

import sys
import logging
from pathlib import Path

from gpregpol import PolicyRecord, RegistryValueKind, read_pol_file, write_pol_file
from gpregpol.core.exceptions import RegPolError
from gpregpol.policy import upsert_records

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

KEY = r"Software\Policies\Microsoft\Windows\WindowsUpdate\AU"


def edit_policy(pol_path: str):
    """Turn off automatic updates and drop a stale schedule value."""
    path = Path(pol_path)
    records = read_pol_file(path, logger=logger) if path.exists() else []
    logger.info(f"Loaded {len(records)} records from {path}")

    updates = [
        PolicyRecord(KEY, "NoAutoUpdate", RegistryValueKind.DWORD, 1),
        PolicyRecord(KEY, "AUOptions", RegistryValueKind.DWORD, 2),
        # Group Policy clients treat **del.<name> as "delete <name>"
        PolicyRecord(KEY, "**del.ScheduledInstallTime", RegistryValueKind.SZ, " "),
    ]
    merged, replaced, appended = upsert_records(records, updates)
    logger.info(f"{replaced} replaced, {appended} added")

    write_pol_file(path, merged, force=True, logger=logger)

    for r in read_pol_file(path, logger=logger):
        logger.info(f"  {r.path} = {r.value_data!r} ({r.value_type.reg_name})")


def main():
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    try:
        edit_policy(sys.argv[1])
    except RegPolError as e:
        logger.error(f"Failed: {e}")
        sys.exit(e.code)


if __name__ == "__main__":
    main()
