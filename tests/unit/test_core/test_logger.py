# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import json
import logging

import pytest

from gpregpol.core.logger import TRACE, EmojiFormatter, JsonFormatter, Log, LogStyle, get_logger


def _record(msg: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    rec = logging.LogRecord("gpregpol", level, __file__, 10, msg, (), None)
    for k, v in extra.items():
        setattr(rec, k, v)
    return rec


@pytest.mark.unit
class TestLogLevels:
    @pytest.mark.parametrize(
        "verbose, quiet, level",
        [
            (0, 0, logging.INFO),
            (2, 0, logging.DEBUG),
            (3, 0, TRACE),
            (0, 1, logging.WARNING),
            (3, 2, logging.ERROR),
        ],
    )
    def test_level_from_flags(self, verbose, quiet, level):
        assert Log._level_from_flags(verbose, quiet) == level

    def test_setup_replaces_handlers(self):
        logger = Log.setup(0, logger_name="gpregpol.test.setup")
        Log.setup(2, logger_name="gpregpol.test.setup")
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_setup_with_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = Log.setup(0, str(log_file), logger_name="gpregpol.test.file")
        logger.info("hello file")
        for h in logger.handlers:
            h.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()

    def test_get_logger_default(self):
        assert get_logger(None).name == "gpregpol"
        custom = logging.getLogger("custom")
        assert get_logger(custom) is custom


@pytest.mark.unit
class TestFormatters:
    def test_emoji_formatter_includes_context(self):
        fmt = EmojiFormatter(LogStyle(color=False, unicode=False))
        line = fmt.format(_record("decoded", ctx={"entries": 3}))
        assert "INFO" in line
        assert "decoded" in line
        assert line.endswith("entries=3")

    def test_json_formatter(self):
        obj = json.loads(JsonFormatter().format(_record("hi", ctx={"offset": 8})))
        assert obj["msg"] == "hi"
        assert obj["level"] == "INFO"
        assert obj["ctx"] == {"offset": "8"}

    def test_bind_merges_context(self):
        adapter = Log.bind(logging.getLogger("gpregpol.test.bind"), file="a.pol").bind(entry=2)
        _msg, kwargs = adapter.process("m", {"extra": {"ctx": {"offset": 4}}})
        assert kwargs["extra"]["ctx"] == {"file": "a.pol", "entry": 2, "offset": 4}

    def test_bind_on_adapter_flattens(self):
        base = logging.getLogger("gpregpol.test.rebind")
        adapter = Log.bind(Log.bind(base, file="a.pol"), step="write")
        assert adapter.logger is base
        assert adapter.extra["ctx"] == {"file": "a.pol", "step": "write"}


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=TRACE)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.mark.unit
class TestLogHelpers:
    def test_step_and_ok_carry_context(self):
        logger = logging.getLogger("gpregpol.test.helpers")
        logger.propagate = False
        logger.setLevel(logging.INFO)
        handler = _ListHandler()
        logger.addHandler(handler)
        try:
            Log.step(logger, "Updating", added=1)
            Log.ok(logger, "Wrote")
        finally:
            logger.removeHandler(handler)

        first, second = handler.records
        assert first.getMessage().endswith("Updating")
        assert first.ctx == {"added": 1}
        assert not hasattr(second, "ctx")
