"""Fake Collaborators — in-memory stand-ins for the key/value store, Facebook and Stripe.

Invariants:
    - Each fake records every call so tests can assert on side effects
    - Failures are injected per operation/key, never randomly
    - FakeKeyValueStore mirrors SqlKeyValueStore semantics (lrange newest-first,
      counters default to 0)

Design Decisions:
    - Flat classes, no inheritance: they satisfy the Protocols structurally
"""

from collections import defaultdict

from app.core.errors import ExternalAuthInvalidError, PaymentGatewayError, StorageError
from app.core.repository_protocols import ExternalIdentity


class FakeKeyValueStore:
    """Dict-backed KeyValueStore with per-key failure injection."""

    def __init__(self):
        self.hashes: dict[str, dict[str, str]] = defaultdict(dict)
        self.lists: dict[str, list[str]] = defaultdict(list)
        self.counters: dict[tuple[str, str], int] = defaultdict(int)
        self.writes: list[tuple[str, str]] = []
        self.failing_keys: set[str] = set()
        self.failing_reads: set[str] = set()

    def _check(self, key: str, failing: set[str], operation: str):
        if key in failing:
            raise StorageError(f"injected failure on {key}", operation)

    async def hget(self, key, field):
        self._check(key, self.failing_reads, "hget")
        return self.hashes[key].get(field)

    async def hset(self, key, field, value):
        self._check(key, self.failing_keys, "hset")
        self.writes.append(("hset", key))
        self.hashes[key][field] = value

    async def lpush(self, key, value):
        self._check(key, self.failing_keys, "lpush")
        self.writes.append(("lpush", key))
        self.lists[key].insert(0, value)

    async def lrange(self, key):
        self._check(key, self.failing_reads, "lrange")
        return list(self.lists[key])

    async def hincrby(self, key, field, amount):
        self._check(key, self.failing_keys, "hincrby")
        self.writes.append(("hincrby", key))
        self.counters[(key, field)] += amount
        return self.counters[(key, field)]

    async def incrby(self, key, amount):
        self._check(key, self.failing_keys, "incrby")
        self.writes.append(("incrby", key))
        self.counters[(key, "")] += amount
        return self.counters[(key, "")]

    async def get_counter(self, key, field=""):
        return self.counters.get((key, field), 0)


class FakeIdentityProvider:
    """Maps login tokens to identities; unknown tokens are rejected."""

    def __init__(self, identities: dict[str, ExternalIdentity] | None = None):
        self.identities = identities or {}
        self.calls: list[str] = []

    async def fetch_identity(self, external_token):
        self.calls.append(external_token)
        identity = self.identities.get(external_token)
        if identity is None:
            raise ExternalAuthInvalidError()
        return identity


class FakePaymentGateway:
    """Records customers and charges; declines on demand."""

    def __init__(self):
        self.customers: dict[str, dict] = {}
        self.charges: list[dict] = []
        self.updates: list[tuple[str, str]] = []
        self.decline_charges = False
        self.decline_customers = False

    async def create_customer(self, source, metadata):
        if self.decline_customers:
            raise PaymentGatewayError("card declined", "customer create")
        customer_id = f"cus_{len(self.customers) + 1}"
        self.customers[customer_id] = {"source": source, "metadata": metadata}
        return customer_id

    async def update_customer_source(self, customer_id, source):
        if self.decline_customers:
            raise PaymentGatewayError("card declined", "customer update")
        self.updates.append((customer_id, source))
        self.customers[customer_id]["source"] = source

    async def create_charge(self, amount, customer_id, metadata):
        if self.decline_charges:
            raise PaymentGatewayError("card declined", "charge")
        charge_id = f"ch_{len(self.charges) + 1}"
        self.charges.append({
            "id": charge_id, "amount": amount,
            "customer": customer_id, "metadata": metadata,
        })
        return charge_id


class SequentialIdens:
    """Deterministic IdenGenerator: iden1, iden2, ..."""

    def __init__(self, prefix: str = "iden"):
        self._prefix = prefix
        self._n = 0

    def __call__(self) -> str:
        self._n += 1
        return f"{self._prefix}{self._n}"


class FixedClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now
