"""Boundary Protocols — contracts between services and the outside world.

Invariants:
    - Services depend on these Protocols, never on concrete clients
    - Implementations are constructed once at startup and injected
    - Every implementation maps its own library errors to core/errors.py types
      (StorageError, ExternalAuthInvalidError, PaymentGatewayError)

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async methods: every implementation does IO
"""

from dataclasses import dataclass
from typing import Protocol

from app.core.domain_types import FacebookUserId, StripeCustomerId


@dataclass(frozen=True)
class ExternalIdentity:
    """Verified identity returned by the social-login provider."""
    id: FacebookUserId
    name: str | None = None
    email: str | None = None


class KeyValueStore(Protocol):
    """Hash, list and counter primitives keyed by store_keys conventions."""
    async def hget(self, key: str, field: str) -> str | None: ...
    async def hset(self, key: str, field: str, value: str) -> None: ...
    async def lpush(self, key: str, value: str) -> None: ...
    async def lrange(self, key: str) -> list[str]: ...
    async def hincrby(self, key: str, field: str, amount: int) -> int: ...
    async def incrby(self, key: str, amount: int) -> int: ...
    async def get_counter(self, key: str, field: str = "") -> int: ...


class IdentityProvider(Protocol):
    """Social-login token validation and profile fetch."""
    async def fetch_identity(self, external_token: str) -> ExternalIdentity: ...


class PaymentGateway(Protocol):
    """Billing customers and charges. Amounts are in minor units (cents)."""
    async def create_customer(self, source: str, metadata: dict[str, str]) -> StripeCustomerId: ...
    async def update_customer_source(self, customer_id: StripeCustomerId, source: str) -> None: ...
    async def create_charge(
        self, amount: int, customer_id: StripeCustomerId, metadata: dict[str, str],
    ) -> str: ...
