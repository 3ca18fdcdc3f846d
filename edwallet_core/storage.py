"""
JSON file persistence for wallets.

On-disk format (one JSON object per file):

    {
      "public_key":  "<base64>",
      "private_key": "<base64>",
      "address":     "<hex>",
      "version":     "1"
    }

Key bytes use standard base64, which is how Go's ``encoding/json`` writes
byte slices, so files produced by the Go wallet load unchanged.  A missing,
``null`` or empty ``version`` is accepted and read back as ``None``.

Usage:
    store = WalletStore("data/wallet.json")
    store.save(wallet)
    wallet = store.load()
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
from pathlib import Path

from edwallet_core.errors import DecodingError, StorageFailure
from edwallet_core.wallet import Wallet, WalletRecord, from_record, to_record

logger = logging.getLogger("edwallet_storage")


# ===================================================================
#  Record <-> JSON
# ===================================================================

def record_to_json(record: WalletRecord) -> str:
    return json.dumps({
        "public_key": base64.b64encode(record.public_key).decode("ascii"),
        "private_key": base64.b64encode(record.private_key).decode("ascii"),
        "address": record.address,
        "version": record.version,
    })


def _b64_field(data: dict, name: str) -> bytes:
    value = data.get(name)
    if not isinstance(value, str):
        raise DecodingError("record_from_json", f"field {name!r} missing or not a string")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodingError("record_from_json", f"field {name!r} is not valid base64") from exc


def record_from_json(text: str | bytes) -> WalletRecord:
    """Parse a wallet JSON document into a ``WalletRecord``."""
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting
        # exhausts the decoder's recursion limit.
        raise DecodingError("record_from_json", f"malformed JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DecodingError("record_from_json", "top-level value must be an object")

    public_key = _b64_field(data, "public_key")
    private_key = _b64_field(data, "private_key")

    address = data.get("address")
    if address is None:
        address = ""
    elif not isinstance(address, str):
        raise DecodingError("record_from_json", "field 'address' must be a string")

    version = data.get("version")
    # bool is an int subclass
    if isinstance(version, bool) or not isinstance(version, (str, int, type(None))):
        raise DecodingError("record_from_json", "field 'version' must be a string")
    version = str(version) if version not in (None, "") else None

    return WalletRecord(
        public_key=public_key,
        private_key=private_key,
        address=address,
        version=version,
    )


# ===================================================================
#  File store
# ===================================================================

class WalletStore:
    """Reads and writes a single wallet JSON file."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, wallet: Wallet) -> None:
        """Write *wallet* to the store path (mode 0600)."""
        payload = record_to_json(to_record(wallet))
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as exc:
            logger.error(f"Failed to write wallet file {self.path}: {exc}")
            raise StorageFailure("save", f"failed to write wallet file {self.path}: {exc}") from exc
        logger.info(f"Wallet saved: {self.path}")

    def load(self, verify_keys: bool = True) -> Wallet:
        """Read and restore the wallet at the store path."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error(f"Failed to read wallet file {self.path}: {exc}")
            raise StorageFailure("load", f"failed to read wallet file {self.path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise DecodingError("load", f"wallet file {self.path} is not UTF-8 text") from exc
        wallet = from_record(record_from_json(text), verify_keys=verify_keys)
        logger.info(f"Wallet loaded: {self.path}")
        return wallet
