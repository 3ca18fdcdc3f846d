"""
edwallet - edwards25519 wallets with Schnorr signatures.

Key features:
- Key-pair generation over the edwards25519 group
- Stable hex addresses (Salsa20 zero-keystream over the public key)
- Schnorr signing and verification of arbitrary payloads
- JSON wallet files compatible with the Go wallet format
"""

from edwallet_core.errors import (
    DecodingError,
    EncodingError,
    RandomSourceFailure,
    SignatureMismatch,
    StorageFailure,
    WalletError,
)
from edwallet_core.wallet import MIN_VERSION, Wallet, WalletRecord, from_record, to_record

__version__ = "1.0.0"
__all__ = [
    "DecodingError",
    "EncodingError",
    "MIN_VERSION",
    "RandomSourceFailure",
    "SignatureMismatch",
    "StorageFailure",
    "Wallet",
    "WalletError",
    "WalletRecord",
    "from_record",
    "to_record",
]
