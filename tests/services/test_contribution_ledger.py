"""Contribution recording end to end through SqlKeyValueStore (real upserts, six-way fan-out)."""

import json

import pytest

from app.core import store_keys
from app.infrastructure.kv_store import SqlKeyValueStore
from app.services.container import build_services
from tests.services.fake_gateways import SequentialIdens


@pytest.fixture
def sql_store(db_manager):
    return SqlKeyValueStore(db_manager)


@pytest.fixture
async def sql_services(db_manager, seeded, sql_store, identity_provider, gateway, clock):
    services = build_services(
        db_manager, identity_provider, gateway, SequentialIdens("C"),
        store=sql_store, clock=clock,
    )
    await sql_store.hset(store_keys.USER_IDEN_TO_STRIPE_CUSTOMER_ID, "U1", "cus_existing")
    return services


async def test_supporting_contribution_updates_every_counter(
    sql_services, sql_store, user, gateway, clock,
):
    contribution = await sql_services.contributions.create_contribution(user, "E1", "P1", 25)

    assert gateway.charges[0]["amount"] == 2500
    stored = json.loads(await sql_store.hget(store_keys.CONTRIBUTIONS, contribution.iden))
    assert stored["chargeId"] == "ch_1"
    assert stored["amount"] == 25
    assert stored["support"] is True
    assert await sql_store.lrange(
        store_keys.user_reverse_chronological_contributions("U1"),
    ) == [contribution.iden]
    assert await sql_store.get_counter(store_keys.event_contribution_totals("E1"), "support") == 25
    assert await sql_store.get_counter(
        store_keys.politician_contribution_totals("POL1"), "support",
    ) == 25
    assert await sql_store.get_counter(store_keys.CONTRIBUTIONS_SUM) == 25
    assert await sql_store.get_counter(store_keys.user_contributions_sum("U1")) == 25


async def test_every_bookkeeping_write_settles(sql_services, user):
    contribution = await sql_services.contributions.create_contribution(user, "E1", "P2", 10)
    event = await sql_services.entities.get_event("E1")
    settled = await sql_services.contributions.record_contribution(user, event, contribution)
    assert len(settled) == 6
    assert all(outcome.ok for outcome in settled)


async def test_contributions_listed_newest_first(sql_services, user):
    first = await sql_services.contributions.create_contribution(user, "E1", "P1", 25)
    second = await sql_services.contributions.create_contribution(user, "E1", "P2", 5)
    data = await sql_services.profiles.get_profile(user)
    assert data["chargeable"] is True
    assert [c["iden"] for c in data["contributions"]] == [second.iden, first.iden]
