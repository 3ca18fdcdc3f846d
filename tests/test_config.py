"""
Tests for edwallet_core.config — TOML configuration and environment overrides.

Covers:
  - Default values for all dataclass sections
  - TOML parsing and section merging
  - Environment variable overrides (precedence over TOML)
  - _merge helper edge cases
  - Missing TOML files
"""

from __future__ import annotations

import os
import tempfile
import textwrap
import unittest
from unittest.mock import patch

from edwallet_core.config import (
    EdWalletConfig,
    LoggingConfig,
    WalletConfig,
    _merge,
    load_config,
)

_ENV_KEYS = [
    "EDWALLET_WALLET_FILE",
    "EDWALLET_VERSION",
    "EDWALLET_VERIFY_KEYS",
    "EDWALLET_LOG_LEVEL",
    "EDWALLET_LOG_FMT",
]


def _clean_env():
    return {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}


class TestDefaults(unittest.TestCase):

    def test_wallet_defaults(self):
        w = WalletConfig()
        self.assertEqual(w.wallet_file, "data/wallet.json")
        self.assertEqual(w.version, "1")
        self.assertTrue(w.verify_keys)

    def test_logging_defaults(self):
        lg = LoggingConfig()
        self.assertEqual(lg.level, "INFO")
        self.assertEqual(lg.format, "human")
        self.assertIsNone(lg.file)

    def test_top_level(self):
        cfg = EdWalletConfig()
        self.assertIsInstance(cfg.wallet, WalletConfig)
        self.assertIsInstance(cfg.logging, LoggingConfig)


class TestMerge(unittest.TestCase):

    def test_merge_known_keys(self):
        w = WalletConfig()
        _merge(w, {"wallet_file": "x.json", "verify_keys": False})
        self.assertEqual(w.wallet_file, "x.json")
        self.assertFalse(w.verify_keys)

    def test_merge_hyphenated(self):
        w = WalletConfig()
        _merge(w, {"wallet-file": "y.json"})
        self.assertEqual(w.wallet_file, "y.json")

    def test_merge_ignores_unknown(self):
        w = WalletConfig()
        _merge(w, {"bogus": 1})
        self.assertFalse(hasattr(w, "bogus"))


class TestLoadConfig(unittest.TestCase):

    def _write(self, body: str) -> str:
        fd, path = tempfile.mkstemp(suffix=".toml")
        with os.fdopen(fd, "w") as f:
            f.write(textwrap.dedent(body))
        self.addCleanup(os.unlink, path)
        return path

    def test_no_path(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            cfg = load_config(None)
        self.assertEqual(cfg.wallet.wallet_file, "data/wallet.json")

    def test_missing_file_uses_defaults(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            cfg = load_config("/nonexistent/edwallet.toml")
        self.assertEqual(cfg.logging.level, "INFO")

    def test_toml_sections(self):
        path = self._write("""
            [wallet]
            wallet_file = "keys/me.json"
            version = 2
            verify_keys = false

            [logging]
            level = "DEBUG"
            format = "json"
        """)
        with patch.dict(os.environ, _clean_env(), clear=True):
            cfg = load_config(path)
        self.assertEqual(cfg.wallet.wallet_file, "keys/me.json")
        self.assertEqual(cfg.wallet.version, "2")
        self.assertFalse(cfg.wallet.verify_keys)
        self.assertEqual(cfg.logging.level, "DEBUG")
        self.assertEqual(cfg.logging.format, "json")

    def test_env_overrides_toml(self):
        path = self._write("""
            [wallet]
            wallet_file = "from-toml.json"
        """)
        env = _clean_env()
        env.update({
            "EDWALLET_WALLET_FILE": "from-env.json",
            "EDWALLET_VERSION": "5",
            "EDWALLET_LOG_LEVEL": "warning",
            "EDWALLET_LOG_FMT": "json",
        })
        with patch.dict(os.environ, env, clear=True):
            cfg = load_config(path)
        self.assertEqual(cfg.wallet.wallet_file, "from-env.json")
        self.assertEqual(cfg.wallet.version, "5")
        self.assertEqual(cfg.logging.level, "WARNING")
        self.assertEqual(cfg.logging.format, "json")

    def test_env_verify_keys(self):
        for value, expected in [("0", False), ("false", False), ("no", False),
                                ("1", True), ("yes", True)]:
            env = _clean_env()
            env["EDWALLET_VERIFY_KEYS"] = value
            with patch.dict(os.environ, env, clear=True):
                self.assertEqual(load_config(None).wallet.verify_keys, expected, value)


if __name__ == "__main__":
    unittest.main()
