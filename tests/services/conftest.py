"""Service test fixtures — SQLite-backed relational store, fake collaborators, test client.

Invariants:
    - Every test gets a fresh SQLite database with seeded entities
    - The key/value store is the in-memory fake unless a test builds SqlKeyValueStore
    - app.state.services replaced per test; lifespan never runs under ASGITransport

Design Decisions:
    - File-backed SQLite under tmp_path: concurrent lookups each get their own
      connection, as they would against Postgres
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.records import UserProfile
from app.core.repository_protocols import ExternalIdentity
from app.core import store_keys
from app.db.base import Base
from app.infrastructure.database import DatabaseSessionManager
from app.main import app
from app.models import Event, Pac, PacEvent, Politician
from app.services.container import build_services
from tests.services.fake_gateways import (
    FakeIdentityProvider,
    FakeKeyValueStore,
    FakePaymentGateway,
    FixedClock,
    SequentialIdens,
)


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'pledgebook.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    return DatabaseSessionManager(test_engine)


@pytest.fixture
async def seeded(db_manager):
    """POL1 with events E1 (P1 supports, P2 opposes) and E_EMPTY (no positions)."""
    async with db_manager.session() as db:
        db.add(Politician(iden="POL1", name="Jane Senator"))
        db.add(Politician(iden="POL2", name="Abe Governor"))
        db.add(Pac(iden="P1", name="Clean Air PAC"))
        db.add(Pac(iden="P2", name="Coal Forever PAC"))
        db.add(Pac(iden="P3", name="Bystander PAC"))
        await db.flush()
        db.add(Event(iden="E1", politician_iden="POL1", headline="Votes on clean air"))
        db.add(Event(iden="E_EMPTY", politician_iden="POL1", headline="Quiet day"))
        db.add(Event(iden="E_ORPHAN", politician_iden=None, headline="No politician"))
        await db.flush()
        db.add(PacEvent(event_iden="E1", pac_iden="P1", support=True))
        db.add(PacEvent(event_iden="E1", pac_iden="P2", support=False))
        db.add(PacEvent(event_iden="E_ORPHAN", pac_iden="P1", support=True))
        await db.commit()


@pytest.fixture
def fake_store():
    return FakeKeyValueStore()


@pytest.fixture
def identity_provider():
    return FakeIdentityProvider({
        "fb-token-alice": ExternalIdentity(id="fb-alice", name="Alice", email="alice@example.com"),
        "fb-token-alice-2": ExternalIdentity(id="fb-alice", name="Alice", email="alice@example.com"),
        "fb-token-bob": ExternalIdentity(id="fb-bob", name="Bob", email=None),
    })


@pytest.fixture
def gateway():
    return FakePaymentGateway()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def services(db_manager, seeded, fake_store, identity_provider, gateway, clock):
    return build_services(
        db_manager, identity_provider, gateway, SequentialIdens(),
        store=fake_store, clock=clock,
    )


@pytest.fixture
async def user(fake_store, clock):
    """A registered user with a bearer token, written straight to the store."""
    profile = UserProfile(
        iden="U1", facebook_id="fb-carol", name="Carol", email="carol@example.com",
        created=clock.now, modified=clock.now,
    )
    await fake_store.hset(store_keys.USERS, profile.iden, profile.to_json())
    await fake_store.hset(store_keys.USER_IDEN_TO_ACCESS_TOKEN, profile.iden, "token-carol")
    await fake_store.hset(store_keys.ACCESS_TOKEN_TO_USER_IDEN, "token-carol", profile.iden)
    await fake_store.hset(store_keys.FACEBOOK_USER_ID_TO_USER_IDEN, "fb-carol", profile.iden)
    fake_store.writes.clear()
    return profile


@pytest.fixture
async def chargeable_user(user, fake_store):
    await fake_store.hset(store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID, user.iden, "cus_existing")
    fake_store.writes.clear()
    return user


@pytest.fixture
async def client(services):
    """FastAPI test client wired to the per-test service container."""
    app.state.services = services
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    del app.state.services


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer token-carol"}
