# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

import sys
from typing import Optional, Sequence

from .cli.commands import run
from .cli.parser import parse_args_with_config
from .core.exceptions import RegPolError, format_exception_for_cli
from .core.logger import Log


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logger = None

    # Phase 1: parse (config errors can happen here)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except RegPolError as e:
        _print_stderr(f"💥 ERROR    {format_exception_for_cli(e)}")
        return e.code
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        return 130

    # Phase 2: run the command
    try:
        return run(args, logger)
    except RegPolError as e:
        Log.fail(logger, format_exception_for_cli(e, verbose=max(1, int(args.verbose or 0))))
        logger.debug("Error details: %s", e.to_dict(include_cause=True))
        return e.code
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
