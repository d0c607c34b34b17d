# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import json
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.config_loader import Config
from ..core.logger import Log, c

YAML_EXAMPLE = r"""# gpregpol config
#
# gpregpol --config gpregpol.yaml show Registry.pol
# later files override earlier ones:
# gpregpol --config base.yaml --config overrides.yaml import policy.json Registry.pol

verbose: 1          # 2 = DEBUG, 3 = TRACE
quiet: 0
log_file: null
json_logs: false
strict: true        # error on value types without a data representation
force: false        # allow import to overwrite an existing .pol
create: true        # allow set to create a missing .pol
"""


def _add_global_flags(p: argparse.ArgumentParser) -> None:
    from .. import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged config and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -vv DEBUG, -vvv TRACE")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q WARNING, -qq ERROR")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit NDJSON logs on stderr.")
    p.add_argument(
        "--no-strict",
        dest="strict",
        action="store_false",
        default=True,
        help="Keep raw bytes of value types without a data representation instead of failing.",
    )


def _add_commands(p: argparse.ArgumentParser) -> None:
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    show = sub.add_parser("show", help="Print the records of a .pol file.")
    show.add_argument("file", help="Registry.pol file")
    show.add_argument("--json", dest="as_json", action="store_true", help="Print JSON instead of a table.")
    show.add_argument("--key", default=None, help="Only records under this key (case-insensitive)")
    show.add_argument("--name", default=None, help="With --key, only this value name")

    export = sub.add_parser("export", help="Convert a .pol file to JSON.")
    export.add_argument("file", help="Registry.pol file")
    export.add_argument("output", help="JSON output path, or '-' for stdout")

    imp = sub.add_parser("import", help="Build a .pol file from JSON.")
    imp.add_argument("input", help="JSON file produced by 'export'")
    imp.add_argument("output", help="Registry.pol output path")
    imp.add_argument("--force", dest="force", action="store_true", default=argparse.SUPPRESS, help="Overwrite an existing output file.")

    st = sub.add_parser("set", help="Add or replace one value in a .pol file.")
    st.add_argument("file", help="Registry.pol file")
    st.add_argument("--key", required=True, help=r"Key path, e.g. Software\Policies\Vendor\App")
    st.add_argument("--name", default="", help="Value name (empty for the default value)")
    st.add_argument("--type", dest="value_type", default="REG_SZ", help="Value type, e.g. REG_SZ, REG_DWORD, REG_MULTI_SZ")
    st.add_argument(
        "--data",
        action="append",
        default=None,
        help="Value data; repeat for REG_MULTI_SZ, hex for REG_BINARY, 0x.. or decimal for REG_DWORD/REG_QWORD",
    )
    st.add_argument("--no-create", dest="create", action="store_false", default=argparse.SUPPRESS, help="Fail if the file is missing.")

    rm = sub.add_parser("remove", help="Remove values from a .pol file.")
    rm.add_argument("file", help="Registry.pol file")
    rm.add_argument("--key", required=True, help="Key path")
    rm.add_argument("--name", default=None, help="Value name (all values of the key when omitted)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gpregpol",
        description=c("gpregpol: read, write and edit Group Policy Registry.pol files", "green", ["bold"]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Example config:\n\n" + YAML_EXAMPLE,
    )
    _add_global_flags(p)
    _add_commands(p)
    # Subcommand flags use SUPPRESS so these (and config) defaults survive.
    p.set_defaults(force=False, create=True)
    return p


def parse_args_with_config(argv: Optional[Sequence[str]] = None, logger=None) -> Tuple[argparse.Namespace, Dict[str, Any], Any]:
    """
    Two-phase parse.

      Phase 0: parse only the flags needed to find config and set up logging
      Phase 1: load+merge config files and apply them as argparse defaults
      Phase 2: full parse, so flags override config values

    Returns: (args, merged_config_dict, logger)
    """
    parser = build_parser()

    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    pre.add_argument("--config", action="append", default=[])
    pre.add_argument("-v", "--verbose", action="count", default=0)
    pre.add_argument("-q", "--quiet", action="count", default=0)
    pre.add_argument("--log-file", dest="log_file", default=None)
    pre.add_argument("--json-logs", dest="json_logs", action="store_true")
    pre.add_argument("--dump-config", action="store_true")
    args0, _rest = pre.parse_known_args(argv)

    if logger is None:
        logger = Log.setup(args0.verbose, args0.log_file, quiet=args0.quiet, json_logs=args0.json_logs)

    conf: Dict[str, Any] = {}
    if args0.config:
        paths = Config.expand_configs(logger, list(args0.config))
        conf = Config.load_many(logger, paths)
        Config.apply_as_defaults(logger, parser, conf)

    if args0.dump_config:
        print(json.dumps(conf, indent=2, sort_keys=True, default=str))
        raise SystemExit(0)

    args = parser.parse_args(argv)

    # Config may change logging knobs that phase 0 could not see.
    if conf and any(k in conf for k in ("verbose", "quiet", "log_file", "json_logs")):
        logger = Log.setup(
            int(args.verbose or 0),
            args.log_file,
            quiet=int(args.quiet or 0),
            json_logs=bool(args.json_logs),
        )

    return args, conf, logger
