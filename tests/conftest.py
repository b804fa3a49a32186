"""Pytest fixtures for securelink tests."""

import os

import pytest

from securelink import FixedClock, Md5Hasher, SecureLink


class StaticSignatureHasher:
    """Hasher that ignores its input and always returns the same signature."""

    def __init__(self, signature: str):
        self.signature = signature

    def hash(self, data):
        return self.signature

    def is_valid(self, claimed, data):
        return claimed == self.signature


@pytest.fixture
def epoch_clock() -> FixedClock:
    """Clock frozen at the unix epoch."""
    return FixedClock(0)


@pytest.fixture
def static_link(epoch_clock) -> SecureLink:
    """Signer whose signature is always 'foobar'."""
    return SecureLink("secret", StaticSignatureHasher("foobar"), "_sig", "_expires", epoch_clock)


@pytest.fixture
def md5_link(epoch_clock) -> SecureLink:
    """Signer using md5 with underscore-prefixed parameter names."""
    return SecureLink("secret", Md5Hasher(), "_sig", "_expires", epoch_clock)


@pytest.fixture(autouse=True)
def clean_securelink_env(monkeypatch):
    """Keep host SECURELINK_* variables out of configuration tests."""
    for key in list(os.environ):
        if key.startswith("SECURELINK_"):
            monkeypatch.delenv(key)
