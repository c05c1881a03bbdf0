"""Shared test configuration.

The encryption secret must exist before ``app.main`` is imported, because
the module-level application reads settings at construction time.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest

os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-secret")

from app.application.interfaces import FieldCipher  # noqa: E402


class ReversingCipher(FieldCipher):
    """Reversible, deterministic stand-in for the AES cipher."""

    PREFIX = "enc:"

    def encrypt(self, plaintext: str) -> str:
        return self.PREFIX + plaintext[::-1]

    def decrypt(self, encoded: str) -> str:
        if not encoded.startswith(self.PREFIX):
            return encoded
        return encoded[len(self.PREFIX):][::-1]


class SteppingClock:
    """Clock that advances one second on every call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def fake_cipher() -> ReversingCipher:
    return ReversingCipher()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()
