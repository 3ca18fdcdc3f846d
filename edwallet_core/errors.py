"""
Error kinds raised by edwallet.

Every error carries the name of the operation that failed so callers can
tell a corrupt wallet file from a bad signature without parsing messages:

  - RandomSourceFailure – the OS random source failed (fatal)
  - EncodingError       – an internally built value could not be encoded
  - DecodingError       – malformed external input (record, signature, key)
  - SignatureMismatch   – payload/signature pair does not verify
  - StorageFailure      – filesystem / persistence fault
"""

from __future__ import annotations


class WalletError(Exception):
    """Base class for all edwallet errors."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}" if detail else operation)


class RandomSourceFailure(WalletError):
    """The secure random source could not produce bytes."""


class EncodingError(WalletError):
    """Encoding a scalar, point or record failed."""


class DecodingError(WalletError, ValueError):
    """External bytes or text could not be decoded."""


class SignatureMismatch(WalletError):
    """Signature does not match the payload and public key."""

    def __init__(self, operation: str = "verify", detail: str = "signature does not match"):
        super().__init__(operation, detail)


class StorageFailure(WalletError):
    """Reading or writing a wallet file failed."""
