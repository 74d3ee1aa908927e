"""Tests for SqlKeyValueStore against SQLite (upserts, ordering, counters)."""

import asyncio

import pytest

from app.infrastructure.kv_store import SqlKeyValueStore


@pytest.fixture
def store(db_manager):
    return SqlKeyValueStore(db_manager)


async def test_hget_missing_field_is_none(store):
    assert await store.hget("users", "nobody") is None


async def test_hset_overwrites_existing_field(store):
    await store.hset("users", "U1", "first")
    await store.hset("users", "U1", "second")
    assert await store.hget("users", "U1") == "second"


async def test_hset_fields_are_scoped_by_key(store):
    await store.hset("a", "f", "1")
    await store.hset("b", "f", "2")
    assert await store.hget("a", "f") == "1"
    assert await store.hget("b", "f") == "2"


async def test_lrange_is_newest_first(store):
    for iden in ("c1", "c2", "c3"):
        await store.lpush("user:U1:reverseChronologicalContributions", iden)
    assert await store.lrange("user:U1:reverseChronologicalContributions") == [
        "c3", "c2", "c1",
    ]


async def test_lrange_missing_key_is_empty(store):
    assert await store.lrange("user:nobody:reverseChronologicalContributions") == []


async def test_hincrby_accumulates_per_field(store):
    key = "event:E1:contributionTotals"
    assert await store.hincrby(key, "support", 25) == 25
    assert await store.hincrby(key, "support", 10) == 35
    assert await store.hincrby(key, "oppose", 5) == 5
    assert await store.get_counter(key, "support") == 35
    assert await store.get_counter(key, "oppose") == 5


async def test_incrby_and_missing_counter_defaults_to_zero(store):
    assert await store.get_counter("contributionsSum") == 0
    await store.incrby("contributionsSum", 25)
    assert await store.incrby("contributionsSum", 5) == 30
    assert await store.get_counter("contributionsSum") == 30


async def test_concurrent_increments_are_not_lost(store):
    await asyncio.gather(*(store.incrby("contributionsSum", 1) for _ in range(30)))
    assert await store.get_counter("contributionsSum") == 30


async def test_concurrent_hash_increments_are_not_lost(store):
    key = "event:E1:contributionTotals"
    await asyncio.gather(
        *(store.hincrby(key, "support", 2) for _ in range(15)),
        *(store.hincrby(key, "oppose", 1) for _ in range(15)),
    )
    assert await store.get_counter(key, "support") == 30
    assert await store.get_counter(key, "oppose") == 15
