# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# gpregpol/config/config_loader.py
"""
YAML/JSON configuration files for the CLI.

Files are merged left to right (later wins, nested mappings merged) and then
applied as argparse defaults, so command-line flags still override them.

    # gpregpol.yaml
    verbose: 2
    json_logs: false
    strict: true
    force: false
"""
from __future__ import annotations

import argparse
import glob
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from ..core.exceptions import ConfigError

# Config keys that map onto argparse destinations.
KNOWN_KEYS = frozenset({"verbose", "quiet", "log_file", "json_logs", "strict", "force", "create"})


def _deep_merge(base: Dict[str, Any], extra: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in extra.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = _deep_merge(dict(out[k]), v)
        else:
            out[k] = v
    return out


class Config:
    @staticmethod
    def expand_configs(logger: logging.Logger, paths: List[str]) -> List[Path]:
        """Expand globs and `~`; a pattern matching nothing is an error."""
        out: List[Path] = []
        for raw in paths:
            pattern = str(Path(raw).expanduser())
            matches = sorted(glob.glob(pattern)) if glob.has_magic(pattern) else [pattern]
            if not matches:
                raise ConfigError(msg=f"config pattern matched nothing: {raw}")
            for m in matches:
                logger.debug("Config file: %s", m)
                out.append(Path(m))
        return out

    @staticmethod
    def load_file(path: Path) -> Dict[str, Any]:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(msg=f"cannot read config {path}: {e.strerror or e}", cause=e) from e

        try:
            if Path(path).suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(msg=f"cannot parse config {path}: {e}", cause=e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(msg=f"config {path} must be a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def load_many(logger: logging.Logger, paths: List[Path]) -> Dict[str, Any]:
        conf: Dict[str, Any] = {}
        for p in paths:
            conf = _deep_merge(conf, Config.load_file(p))
            logger.debug("Merged config %s", p)
        return conf

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Mapping[str, Any]) -> None:
        """Set known config keys as parser defaults; unknown keys are reported and ignored."""
        defaults = {}
        for k, v in conf.items():
            key = str(k).replace("-", "_")
            if key in KNOWN_KEYS:
                defaults[key] = v
            else:
                logger.warning("Ignoring unknown config key: %s", k)
        if defaults:
            parser.set_defaults(**defaults)
