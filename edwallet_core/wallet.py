"""
Wallet management for edwallet.

A wallet wraps an edwards25519 key-pair and provides:
  - Key generation
  - Address derivation (memoised)
  - Schnorr signing and verification
  - Conversion to / from a flat ``WalletRecord`` for persistence
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any

from edwallet_core.address import derive_address
from edwallet_core.errors import DecodingError
from edwallet_core.group import Group, RandomSource, default_group
from edwallet_core.schnorr import decode_signature, encode_signature, sign, verify

logger = logging.getLogger("edwallet_wallet")

# Minimum supported wallet format version
MIN_VERSION = 1


@dataclass(frozen=True)
class WalletRecord:
    """Flat, persistable snapshot of a wallet."""
    public_key: bytes
    private_key: bytes
    address: str
    version: str | None = None


class Wallet:
    """Key-pair holder: signs payloads and derives the wallet address."""

    def __init__(
        self,
        private_scalar: int,
        public_point: Any,
        group: Group | None = None,
        version: str | None = str(MIN_VERSION),
    ):
        self._group = group or default_group()
        self._x = private_scalar
        self._y = public_point
        self._version = version
        self._addr: str | None = None
        self._addr_lock = threading.Lock()

    # ---- factory methods ----

    @classmethod
    def generate(
        cls,
        group: Group | None = None,
        version: int | str = MIN_VERSION,
        rng: RandomSource = os.urandom,
    ) -> Wallet:
        """Generate a brand-new wallet."""
        group = group or default_group()
        x = group.sample_scalar(rng)       # private key
        y = group.base_point_mul(x)         # public key
        return cls(x, y, group=group, version=str(version))

    # ---- accessors ----

    @property
    def group(self) -> Group:
        return self._group

    @property
    def private_scalar(self) -> int:
        return self._x

    @property
    def public_point(self) -> Any:
        return self._y

    @property
    def version(self) -> str | None:
        return self._version

    def public_key_bytes(self) -> bytes:
        """Canonical encoding of the public point."""
        return self._group.encode_point(self._y)

    def private_key_bytes(self) -> bytes:
        return self._group.encode_scalar(self._x)

    def address(self) -> str:
        """Wallet address; computed on first use and cached."""
        if self._addr is not None:
            return self._addr
        with self._addr_lock:
            if self._addr is None:
                self._addr = derive_address(self.public_key_bytes())
        return self._addr

    # ---- signing ----

    def sign(self, payload: bytes, rng: RandomSource = os.urandom) -> bytes:
        """Sign *payload* and return the encoded signature."""
        sig = sign(self._x, self._y, payload, self._group, rng)
        return encode_signature(sig, self._group)

    def verify_signature(self, payload: bytes, signature: bytes) -> None:
        """Raise ``SignatureMismatch`` / ``DecodingError`` unless *signature* is valid."""
        sig = decode_signature(signature, self._group)
        verify(self._y, payload, sig, self._group)

    # ---- persistence shortcuts ----

    def save(self, path: str) -> None:
        from edwallet_core.storage import WalletStore
        WalletStore(path).save(self)

    @classmethod
    def load(cls, path: str, verify_keys: bool = True) -> Wallet:
        from edwallet_core.storage import WalletStore
        return WalletStore(path).load(verify_keys=verify_keys)

    def __repr__(self) -> str:
        return f"Wallet({self.address()})"


# ===================================================================
#  Record codec
# ===================================================================

def to_record(wallet: Wallet) -> WalletRecord:
    """Snapshot *wallet* into a ``WalletRecord``; raises ``EncodingError``."""
    return WalletRecord(
        public_key=wallet.public_key_bytes(),
        private_key=wallet.private_key_bytes(),
        address=wallet.address(),
        version=wallet.version,
    )


def from_record(
    record: WalletRecord,
    group: Group | None = None,
    verify_keys: bool = True,
) -> Wallet:
    """
    Rebuild a wallet from *record*.

    Both keys must decode or nothing is returned.  With *verify_keys* the
    public key must also equal private·B.  The stored address is not
    trusted; the wallet recomputes it on demand.
    """
    group = group or default_group()
    try:
        x = group.decode_scalar(record.private_key)
    except DecodingError as exc:
        raise DecodingError("from_record", f"failed to decode private key: {exc.detail}") from exc
    try:
        y = group.decode_point(record.public_key)
    except DecodingError as exc:
        raise DecodingError("from_record", f"failed to decode public key: {exc.detail}") from exc

    if verify_keys and not group.point_equal(group.base_point_mul(x), y):
        raise DecodingError("from_record", "public key does not match private key")

    wallet = Wallet(x, y, group=group, version=record.version)
    if record.address and record.address != wallet.address():
        logger.warning(
            f"Stored address {record.address} differs from derived {wallet.address()}"
        )
    return wallet
