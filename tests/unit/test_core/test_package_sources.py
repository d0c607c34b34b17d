# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import warnings
from pathlib import Path

import pytest

import gpregpol

_SOURCES = sorted(Path(gpregpol.__file__).resolve().parent.rglob("*.py"))


@pytest.mark.unit
class TestPackageSources:
    @pytest.mark.parametrize("path", _SOURCES, ids=lambda p: p.name)
    def test_compiles_without_warnings(self, path):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(path.read_text(encoding="utf-8"), str(path), "exec")

    def test_docstring_keeps_registry_path(self):
        assert r"Software\Policies\Test" in gpregpol.__doc__
