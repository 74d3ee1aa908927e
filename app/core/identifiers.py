"""Identifier Generation — idens for users and contributions, bearer tokens.

Invariants:
    - Access tokens come from the OS CSPRNG: 64 random bytes, hex-encoded
    - Every IdenGenerator returns a non-empty lowercase alphanumeric string

Design Decisions:
    - IdenGenerator is a Protocol so services take it by injection and tests can
      pin idens deterministically
    - LegacyIdenGenerator reproduces the historical scheme (two base-36 renderings
      of a non-cryptographic random draw). It is weak: collisions and predictability
      are possible. Kept only for compatibility with idens already stored;
      SecureIdenGenerator is the default
"""

import random
import secrets
import string
from typing import Protocol

from app.core.domain_types import AccessToken

ACCESS_TOKEN_BYTES = 64

_BASE36 = string.digits + string.ascii_lowercase


class IdenGenerator(Protocol):
    """Contract for opaque identifier generation."""
    def __call__(self) -> str: ...


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class LegacyIdenGenerator:
    """Weak historical scheme. Do not use for new deployments."""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def __call__(self) -> str:
        return _to_base36(self._rng.getrandbits(52)) + _to_base36(self._rng.getrandbits(52))


class SecureIdenGenerator:
    """CSPRNG-backed idens, 128 bits of entropy."""

    def __call__(self) -> str:
        return secrets.token_hex(16)


def generate_access_token() -> AccessToken:
    return AccessToken(secrets.token_hex(ACCESS_TOKEN_BYTES))
