"""
Shared pytest fixtures for the edwallet test suite.
"""

import pytest

from edwallet_core.group import Ed25519Group
from edwallet_core.wallet import Wallet


def _counting_rng(start: int = 1):
    """Deterministic byte source: each call shifts the pattern by one."""
    state = {"next": start}

    def rng(n: int) -> bytes:
        value = state["next"]
        state["next"] += 1
        return bytes((value + i) % 256 for i in range(n))

    return rng


@pytest.fixture
def counting_rng():
    """Factory for deterministic, non-repeating byte sources."""
    return _counting_rng


@pytest.fixture
def fixed_rng():
    """Factory for byte sources that repeat the same output every call."""
    return lambda byte=7: (lambda n: bytes([byte]) * n)


@pytest.fixture
def group():
    return Ed25519Group()


@pytest.fixture
def wallet(group):
    """Fresh wallet."""
    return Wallet.generate(group=group)


@pytest.fixture
def other_wallet(group):
    """Second, unrelated wallet."""
    return Wallet.generate(group=group)


@pytest.fixture
def wallet_path(tmp_path):
    return tmp_path / "wallets" / "w1.json"
