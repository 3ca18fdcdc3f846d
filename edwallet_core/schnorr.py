"""
Schnorr signatures over a prime-order group.

Signing (x = private scalar, B = base point):
  1. v ← fresh random scalar (never reused)
  2. T = v·B
  3. c = H(enc(T), payload)
  4. r = v − x·c
  → Signature(c, r)

Verification recomputes T' = r·B + c·P, which equals T for a genuine
signature, and accepts iff H(enc(T'), payload) == c.

Wire form: enc(c) || enc(r) using the group's scalar encoding.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from edwallet_core.errors import DecodingError, EncodingError, SignatureMismatch
from edwallet_core.group import Group, RandomSource

logger = logging.getLogger("edwallet_schnorr")


@dataclass(frozen=True)
class Signature:
    """A Schnorr (challenge, response) pair."""
    challenge: int
    response: int


def _check_payload(payload: Any) -> bytes:
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise TypeError(f"payload must be bytes-like, not {type(payload).__name__}")
    return bytes(payload)


def sign(
    private_scalar: int,
    public_point: Any,
    payload: bytes,
    group: Group,
    rng: RandomSource = os.urandom,
) -> Signature:
    """
    Sign *payload* with *private_scalar*.

    *public_point* is not part of the arithmetic; it is accepted so signer
    and verifier share the same call shape.
    """
    payload = _check_payload(payload)
    v = group.sample_scalar(rng)
    commitment = group.base_point_mul(v)
    c = group.hash_to_scalar(group.encode_point(commitment), payload)
    r = group.scalar_sub(v, group.scalar_mul(private_scalar, c))
    return Signature(challenge=c, response=r)


def verify(public_point: Any, payload: bytes, signature: Signature, group: Group) -> None:
    """
    Check *signature* over *payload* for *public_point*.

    Returns ``None`` on success and raises ``SignatureMismatch`` otherwise.
    """
    payload = _check_payload(payload)
    commitment = group.point_add(
        group.base_point_mul(signature.response),
        group.scalar_mul_point(signature.challenge, public_point),
    )
    try:
        seed = group.encode_point(commitment)
    except EncodingError as exc:
        # Reconstructed commitment is the identity: no genuine signature does that
        raise SignatureMismatch("verify", "commitment reconstructs to the identity") from exc
    c = group.hash_to_scalar(seed, payload)
    if not group.scalar_equal(c, signature.challenge):
        logger.debug("Schnorr challenge mismatch")
        raise SignatureMismatch()


def encode_signature(signature: Signature, group: Group) -> bytes:
    """Challenge then response, each in the group's scalar encoding."""
    return group.encode_scalar(signature.challenge) + group.encode_scalar(signature.response)


def decode_signature(data: bytes, group: Group) -> Signature:
    """Parse the wire form, rejecting empty, truncated or over-length input."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodingError("decode_signature", "signature must be bytes")
    data = bytes(data)
    expected = 2 * group.scalar_len
    if len(data) != expected:
        raise DecodingError(
            "decode_signature", f"expected {expected} bytes, got {len(data)}",
        )
    n = group.scalar_len
    try:
        challenge = group.decode_scalar(data[:n])
        response = group.decode_scalar(data[n:])
    except DecodingError as exc:
        raise DecodingError("decode_signature", exc.detail) from exc
    return Signature(challenge=challenge, response=response)
