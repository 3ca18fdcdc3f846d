"""
TOML-based configuration for edwallet.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Usage:
    from edwallet_core.config import load_config
    cfg = load_config("edwallet.toml")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import,no-redef]


@dataclass
class WalletConfig:
    """Wallet file location and restore policy.

    ``verify_keys`` re-checks that the stored public key belongs to the
    stored private key when a wallet file is loaded.
    """
    wallet_file: str = "data/wallet.json"
    version: str = "1"
    verify_keys: bool = True


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class EdWalletConfig:
    """Top-level configuration container."""
    wallet: WalletConfig = field(default_factory=WalletConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def _env_bool(value: str) -> bool:
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def load_config(path: str | None = None) -> EdWalletConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    Env-var mapping:
        EDWALLET_WALLET_FILE  -> wallet.wallet_file
        EDWALLET_VERSION      -> wallet.version
        EDWALLET_VERIFY_KEYS  -> wallet.verify_keys  (0/false/no/off disable)
        EDWALLET_LOG_LEVEL    -> logging.level
        EDWALLET_LOG_FMT      -> logging.format
    """
    cfg = EdWalletConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("wallet", cfg.wallet),
                ("logging", cfg.logging),
            ]:
                if section_name in data:
                    _merge(section_dc, data[section_name])

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("EDWALLET_WALLET_FILE"):
        cfg.wallet.wallet_file = v
    if v := os.environ.get("EDWALLET_VERSION"):
        cfg.wallet.version = v
    if (v := os.environ.get("EDWALLET_VERIFY_KEYS")) is not None:
        cfg.wallet.verify_keys = _env_bool(v)
    if v := os.environ.get("EDWALLET_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("EDWALLET_LOG_FMT"):
        cfg.logging.format = v

    # TOML integers are accepted for the version field
    cfg.wallet.version = str(cfg.wallet.version)
    return cfg
