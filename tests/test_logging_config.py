"""
Tests for edwallet_core.logging_config — formatters and root logger setup.
"""

from __future__ import annotations

import json
import logging
import sys

import pytest

from edwallet_core.errors import DecodingError
from edwallet_core.logging_config import _HumanFormatter, _JSONFormatter, setup_logging


def _record(msg="hello", level=logging.INFO, exc=None):
    exc_info = (type(exc), exc, None) if exc else None
    return logging.LogRecord("edwallet_test", level, __file__, 1, msg, None, exc_info)


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:
    def test_fields(self):
        out = json.loads(_JSONFormatter().format(_record("saved")))
        assert out["msg"] == "saved"
        assert out["level"] == "INFO"
        assert out["logger"] == "edwallet_test"
        assert "ts" in out
        assert "op" not in out

    def test_wallet_error_operation(self):
        err = DecodingError("decode_signature", "expected 64 bytes, got 3")
        out = json.loads(_JSONFormatter().format(_record("bad", logging.ERROR, err)))
        assert out["op"] == "decode_signature"
        assert "exception" in out


class TestHumanFormatter:
    def test_plain(self):
        line = _HumanFormatter(colour=False).format(_record("loaded"))
        assert "[INFO   ]" in line
        assert line.endswith("edwallet_test: loaded")
        assert "\033[" not in line

    def test_colour(self):
        line = _HumanFormatter(colour=True).format(_record("loaded", logging.WARNING))
        assert line.startswith("\033[33m")

    def test_operation_suffix(self):
        err = DecodingError("load", "bad file")
        line = _HumanFormatter(colour=False).format(_record("x", logging.ERROR, err))
        assert line.endswith("(op=load)")


class TestSetupLogging:
    def test_human(self, restore_root):
        setup_logging(level="DEBUG")
        assert restore_root.level == logging.DEBUG
        assert len(restore_root.handlers) == 1
        assert isinstance(restore_root.handlers[0].formatter, _HumanFormatter)

    def test_json_and_file(self, restore_root, tmp_path):
        log_file = tmp_path / "logs" / "edwallet.log"
        setup_logging(level="info", fmt="json", log_file=str(log_file))
        assert len(restore_root.handlers) == 2
        assert all(isinstance(h.formatter, _JSONFormatter) for h in restore_root.handlers)
        logging.getLogger("edwallet_test").info("to file")
        for h in restore_root.handlers:
            h.flush()
        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["msg"] == "to file"
        for h in restore_root.handlers:
            if isinstance(h, logging.FileHandler):
                h.close()

    def test_unknown_level_defaults_to_info(self, restore_root):
        setup_logging(level="chatty")
        assert restore_root.level == logging.INFO

    def test_no_duplicate_handlers(self, restore_root):
        setup_logging()
        setup_logging()
        assert len(restore_root.handlers) == 1
        assert restore_root.handlers[0].stream is sys.stderr
