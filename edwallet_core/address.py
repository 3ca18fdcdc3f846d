"""
Address derivation.

An address is the lowercase hex encoding of the public key XORed with the
zero-key Salsa20 keystream.  The transform is a bijection: anyone holding
an address can recover the public key with ``address_to_public_key``.
"""

from __future__ import annotations

import re

from edwallet_core.errors import DecodingError
from edwallet_core.keystream import ZERO_KEY, ZERO_NONCE, xor_keystream

_ADDRESS_RE = re.compile(r"(?:[0-9a-f]{2})*")


def derive_address(public_key_bytes: bytes) -> str:
    """Derive the display address for an encoded public key."""
    return xor_keystream(public_key_bytes, ZERO_KEY, ZERO_NONCE).hex()


def address_to_public_key(address: str) -> bytes:
    """Recover the encoded public key from an address."""
    if not isinstance(address, str) or not _ADDRESS_RE.fullmatch(address):
        raise DecodingError("address_to_public_key", "address must be lowercase hex")
    return xor_keystream(bytes.fromhex(address), ZERO_KEY, ZERO_NONCE)
