#!/usr/bin/env python3
"""
edwallet command-line front end.

Usage:
    python run_wallet.py generate [--version 1] [--force]
    python run_wallet.py address
    python run_wallet.py show
    python run_wallet.py sign --message "hello world"
    python run_wallet.py verify --message "hello world" --signature <hex>
    python run_wallet.py verify --file payload.bin --signature <hex> --address <hex>

Every command accepts ``--config edwallet.toml`` and ``--wallet PATH``.

Exit codes for ``verify``: 0 valid, 1 signature mismatch, 2 bad input.

Environment variables (alternative to flags):
    EDWALLET_WALLET_FILE, EDWALLET_VERSION, EDWALLET_VERIFY_KEYS,
    EDWALLET_LOG_LEVEL, EDWALLET_LOG_FMT
"""

from __future__ import annotations

import argparse
import base64
import binascii
import json
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is in sys.path so imports work before pip install
# ---------------------------------------------------------------------------
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from edwallet_core.address import address_to_public_key  # noqa: E402
from edwallet_core.config import EdWalletConfig, load_config  # noqa: E402
from edwallet_core.errors import (  # noqa: E402
    DecodingError,
    SignatureMismatch,
    StorageFailure,
    WalletError,
)
from edwallet_core.group import default_group  # noqa: E402
from edwallet_core.logging_config import setup_logging  # noqa: E402
from edwallet_core.schnorr import decode_signature, verify  # noqa: E402
from edwallet_core.storage import WalletStore  # noqa: E402
from edwallet_core.wallet import Wallet  # noqa: E402

logger = logging.getLogger("edwallet")

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


# ===================================================================
#  Commands
# ===================================================================

def _read_payload(args) -> bytes:
    if args.message is not None:
        return args.message.encode("utf-8")
    try:
        with open(args.file, "rb") as f:
            return f.read()
    except OSError as exc:
        raise StorageFailure("read_payload", f"failed to read {args.file}: {exc}") from exc


def _load_wallet(store: WalletStore, cfg: EdWalletConfig) -> Wallet:
    return store.load(verify_keys=cfg.wallet.verify_keys)


def cmd_generate(args, cfg: EdWalletConfig, store: WalletStore) -> int:
    if store.exists() and not args.force:
        print(f"Wallet already exists at {store.path} (use --force to overwrite)",
              file=sys.stderr)
        return EXIT_ERROR
    version = args.version or cfg.wallet.version
    wallet = Wallet.generate(version=version)
    store.save(wallet)
    print(wallet.address())
    return EXIT_OK


def cmd_address(args, cfg: EdWalletConfig, store: WalletStore) -> int:
    print(_load_wallet(store, cfg).address())
    return EXIT_OK


def cmd_show(args, cfg: EdWalletConfig, store: WalletStore) -> int:
    wallet = _load_wallet(store, cfg)
    print(json.dumps({
        "address": wallet.address(),
        "public_key": base64.b64encode(wallet.public_key_bytes()).decode("ascii"),
        "version": wallet.version,
    }, indent=2))
    return EXIT_OK


def cmd_sign(args, cfg: EdWalletConfig, store: WalletStore) -> int:
    wallet = _load_wallet(store, cfg)
    print(wallet.sign(_read_payload(args)).hex())
    return EXIT_OK


def cmd_verify(args, cfg: EdWalletConfig, store: WalletStore) -> int:
    payload = _read_payload(args)
    try:
        signature = bytes.fromhex(args.signature)
    except ValueError as exc:
        raise DecodingError("verify", "signature is not hex") from exc

    group = default_group()
    if args.public_key:
        try:
            public_bytes = base64.b64decode(args.public_key, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodingError("verify", "public key is not valid base64") from exc
    elif args.address:
        public_bytes = address_to_public_key(args.address)
    else:
        public_bytes = _load_wallet(store, cfg).public_key_bytes()

    public_point = group.decode_point(public_bytes)
    try:
        verify(public_point, payload, decode_signature(signature, group), group)
    except SignatureMismatch:
        print("INVALID")
        return EXIT_MISMATCH
    print("OK")
    return EXIT_OK


# ===================================================================
#  Main entry point
# ===================================================================

def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Path to edwallet.toml config file")
    common.add_argument("--wallet", default=None, help="Wallet file (overrides config)")

    p = argparse.ArgumentParser(description="edwallet: edwards25519 Schnorr wallet")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", parents=[common], help="Create a new wallet file")
    g.add_argument("--version", default=None, help="Wallet format version to record")
    g.add_argument("--force", action="store_true", help="Overwrite an existing wallet")
    g.set_defaults(func=cmd_generate)

    a = sub.add_parser("address", parents=[common], help="Print the wallet address")
    a.set_defaults(func=cmd_address)

    s = sub.add_parser("show", parents=[common], help="Print public wallet details")
    s.set_defaults(func=cmd_show)

    for name, func, help_text in [
        ("sign", cmd_sign, "Sign a message or file"),
        ("verify", cmd_verify, "Verify a signature"),
    ]:
        c = sub.add_parser(name, parents=[common], help=help_text)
        src = c.add_mutually_exclusive_group(required=True)
        src.add_argument("--message", default=None, help="UTF-8 text payload")
        src.add_argument("--file", default=None, help="Read payload bytes from file")
        if name == "verify":
            c.add_argument("--signature", required=True, help="Hex-encoded signature")
            key = c.add_mutually_exclusive_group()
            key.add_argument("--public-key", default=None, help="Base64 public key")
            key.add_argument("--address", default=None, help="Signer address")
        c.set_defaults(func=func)

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Load config (TOML + env overrides); CLI flags override config
    cfg = load_config(args.config)
    if args.wallet:
        cfg.wallet.wallet_file = args.wallet

    setup_logging(level=cfg.logging.level, fmt=cfg.logging.format, log_file=cfg.logging.file)
    store = WalletStore(cfg.wallet.wallet_file)

    try:
        return args.func(args, cfg, store)
    except (DecodingError, StorageFailure) as exc:
        logger.error(str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except WalletError as exc:
        logger.critical(str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
