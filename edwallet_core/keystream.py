"""
Salsa20 keystream capability.

Wallet addresses XOR the public key with the Salsa20 keystream produced
by an all-zero key and nonce.  These are fixed for the format; changing
them changes every address.
"""

from __future__ import annotations

from Crypto.Cipher import Salsa20

ZERO_KEY = bytes(32)
ZERO_NONCE = bytes(8)


def xor_keystream(data: bytes, key: bytes = ZERO_KEY, nonce: bytes = ZERO_NONCE) -> bytes:
    """XOR *data* with the Salsa20/20 keystream for *key* / *nonce* (counter 0)."""
    if not data:
        return b""
    cipher = Salsa20.new(key=key, nonce=nonce)
    return cipher.encrypt(bytes(data))
