"""
Prime-order group capability used by the signature and wallet code.

Signature logic only talks to the abstract ``Group`` interface; the
concrete ``Ed25519Group`` wires it to the edwards25519 curve shipped with
the ``ecdsa`` package.

Scalars are plain ints in ``[0, order)``.  Points are whatever the concrete
group uses (``ecdsa.ellipticcurve.PointEdwards`` for ed25519).
"""

from __future__ import annotations

import hashlib
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Callable

from ecdsa.curves import Ed25519
from ecdsa.ellipticcurve import INFINITY, PointEdwards
from ecdsa.errors import MalformedPointError
from ecdsa.numbertheory import SquareRootError

from edwallet_core.errors import DecodingError, EncodingError, RandomSourceFailure

logger = logging.getLogger("edwallet_group")

RandomSource = Callable[[int], bytes]

# BLAKE2b personalisation for challenge hashing (max 16 bytes)
_HASH_PERSON = b"edwallet/schnorr"


class Group(ABC):
    """Scalar and point arithmetic over a prime-order group."""

    scalar_len: int
    point_len: int

    @property
    @abstractmethod
    def order(self) -> int:
        """Order of the scalar field."""

    @abstractmethod
    def sample_scalar(self, rng: RandomSource = os.urandom) -> int:
        """Uniform non-zero scalar drawn from *rng*."""

    @abstractmethod
    def base_point_mul(self, scalar: int) -> Any:
        ...

    @abstractmethod
    def point_add(self, p: Any, q: Any) -> Any:
        ...

    @abstractmethod
    def scalar_mul_point(self, scalar: int, point: Any) -> Any:
        ...

    @abstractmethod
    def point_equal(self, p: Any, q: Any) -> bool:
        ...

    @abstractmethod
    def encode_point(self, point: Any) -> bytes:
        ...

    @abstractmethod
    def decode_point(self, data: bytes) -> Any:
        ...

    @abstractmethod
    def encode_scalar(self, scalar: int) -> bytes:
        ...

    @abstractmethod
    def decode_scalar(self, data: bytes) -> int:
        ...

    @abstractmethod
    def hash_to_scalar(self, seed: bytes, payload: bytes) -> int:
        """Deterministic scalar from *payload* keyed by *seed*."""

    # ---- scalar field arithmetic (shared) ----

    def scalar_add(self, a: int, b: int) -> int:
        return (a + b) % self.order

    def scalar_sub(self, a: int, b: int) -> int:
        return (a - b) % self.order

    def scalar_mul(self, a: int, b: int) -> int:
        return (a * b) % self.order

    def scalar_equal(self, a: int, b: int) -> bool:
        return a % self.order == b % self.order


class Ed25519Group(Group):
    """
    edwards25519 (the Ed25519 curve) backed by ``ecdsa``.

    Encodings:
      - scalar: 32 bytes little-endian, must be < order
      - point:  32-byte compressed Edwards form (RFC 8032 section 5.1.2)
    """

    scalar_len = 32
    point_len = 32

    def __init__(self):
        self._generator = Ed25519.generator
        self._curve = Ed25519.curve
        self._order = Ed25519.order

    @property
    def order(self) -> int:
        return self._order

    @property
    def base_point(self) -> PointEdwards:
        return self._generator

    def sample_scalar(self, rng: RandomSource = os.urandom) -> int:
        # 64 bytes reduced mod order keeps the bias negligible
        while True:
            try:
                raw = rng(64)
            except Exception as exc:
                logger.error(f"Random source failed: {exc}")
                raise RandomSourceFailure("sample_scalar", f"random source failed: {exc}") from exc
            if not isinstance(raw, (bytes, bytearray)) or len(raw) != 64:
                raise RandomSourceFailure("sample_scalar", "random source returned a short read")
            scalar = int.from_bytes(raw, "little") % self._order
            if scalar:
                return scalar

    def base_point_mul(self, scalar: int) -> Any:
        return self._generator * (scalar % self._order)

    def point_add(self, p: Any, q: Any) -> Any:
        if p is INFINITY:
            return q
        if q is INFINITY:
            return p
        return p + q

    def scalar_mul_point(self, scalar: int, point: Any) -> Any:
        return point * (scalar % self._order)

    def point_equal(self, p: Any, q: Any) -> bool:
        if p is INFINITY or q is INFINITY:
            return p is q
        return p == q

    def encode_point(self, point: Any) -> bytes:
        if point is INFINITY or not isinstance(point, PointEdwards):
            raise EncodingError("encode_point", "point has no canonical encoding")
        try:
            return bytes(point.to_bytes())
        except (ValueError, ArithmeticError) as exc:
            raise EncodingError("encode_point", str(exc)) from exc

    def decode_point(self, data: bytes) -> PointEdwards:
        data = bytes(data)
        if len(data) != self.point_len:
            raise DecodingError(
                "decode_point", f"expected {self.point_len} bytes, got {len(data)}",
            )
        try:
            point = PointEdwards.from_bytes(self._curve, data)
        except (MalformedPointError, SquareRootError, ValueError, ArithmeticError) as exc:
            raise DecodingError("decode_point", f"invalid group element: {exc}") from exc
        if bytes(point.to_bytes()) != data:
            raise DecodingError("decode_point", "non-canonical point encoding")
        if not self._in_prime_subgroup(point):
            raise DecodingError("decode_point", "point is not in the prime-order subgroup")
        return point

    def _in_prime_subgroup(self, point: PointEdwards) -> bool:
        # x == 0 only for the identity and the order-2 point
        if point.x() == 0:
            return False
        # order * P == O  <=>  (order - 1) * P == -P
        q = point * (self._order - 1)
        if q is INFINITY:
            return False
        p = self._curve.p()
        return q.x() == (-point.x()) % p and q.y() == point.y()

    def encode_scalar(self, scalar: int) -> bytes:
        if not 0 <= scalar < self._order:
            raise EncodingError("encode_scalar", "scalar out of range")
        return scalar.to_bytes(self.scalar_len, "little")

    def decode_scalar(self, data: bytes) -> int:
        data = bytes(data)
        if len(data) != self.scalar_len:
            raise DecodingError(
                "decode_scalar", f"expected {self.scalar_len} bytes, got {len(data)}",
            )
        scalar = int.from_bytes(data, "little")
        if scalar >= self._order:
            raise DecodingError("decode_scalar", "scalar is not reduced")
        return scalar

    def hash_to_scalar(self, seed: bytes, payload: bytes) -> int:
        key = bytes(seed)
        if len(key) > hashlib.blake2b.MAX_KEY_SIZE:
            key = hashlib.blake2b(key).digest()
        h = hashlib.blake2b(bytes(payload), digest_size=64, key=key, person=_HASH_PERSON)
        return int.from_bytes(h.digest(), "little") % self._order

    def __repr__(self) -> str:
        return "Ed25519Group()"


_DEFAULT_GROUP: Ed25519Group | None = None


def default_group() -> Ed25519Group:
    """Shared ``Ed25519Group`` instance (the group holds no mutable state)."""
    global _DEFAULT_GROUP
    if _DEFAULT_GROUP is None:
        _DEFAULT_GROUP = Ed25519Group()
    return _DEFAULT_GROUP
