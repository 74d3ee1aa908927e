"""SQL Key/Value Store — KeyValueStore port implemented on three SQLAlchemy tables.

Invariants:
    - Each operation runs in its own short session and commits before returning
    - hset and counter increments are single upserts (INSERT ... ON CONFLICT DO UPDATE):
      atomic at the database, safe under concurrent requests
    - lrange returns newest-first (lpush semantics)
    - Every SQLAlchemy failure surfaces as StorageError (via DatabaseSessionManager)

Design Decisions:
    - Same engine as the relational models: one connection pool, one migration history
    - Dialect-specific insert constructs (postgresql, sqlite) chosen once at construction;
      both expose the same on_conflict_do_update API
"""

import logging

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from app.core.errors import StorageError
from app.infrastructure.database import DatabaseSessionManager
from app.models.kv_entry import KvCounter, KvHashEntry, KvListEntry

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

_PLAIN_COUNTER_FIELD = ""


class SqlKeyValueStore:
    """Hash/list/counter primitives over kv_* tables."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db
        dialect = db.engine.dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise StorageError(f"Unsupported dialect '{dialect}'", "configure")
        self._insert = _UPSERT_INSERTS[dialect]

    async def hget(self, key: str, field: str) -> str | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(KvHashEntry.value)
                .where(KvHashEntry.key == key)
                .where(KvHashEntry.field == field),
            )
            return result.scalar_one_or_none()

    async def hset(self, key: str, field: str, value: str) -> None:
        stmt = self._insert(KvHashEntry).values(key=key, field=field, value=value)
        stmt = stmt.on_conflict_do_update(
            index_elements=["key", "field"],
            set_={"value": stmt.excluded["value"]},
        )
        async with self._db.session() as db:
            await db.execute(stmt)
            await db.commit()

    async def lpush(self, key: str, value: str) -> None:
        async with self._db.session() as db:
            db.add(KvListEntry(key=key, value=value))
            await db.commit()

    async def lrange(self, key: str) -> list[str]:
        async with self._db.session() as db:
            result = await db.execute(
                select(KvListEntry.value)
                .where(KvListEntry.key == key)
                .order_by(KvListEntry.id.desc()),
            )
            return list(result.scalars().all())

    async def hincrby(self, key: str, field: str, amount: int) -> int:
        return await self._increment(key, field, amount)

    async def incrby(self, key: str, amount: int) -> int:
        return await self._increment(key, _PLAIN_COUNTER_FIELD, amount)

    async def get_counter(self, key: str, field: str = _PLAIN_COUNTER_FIELD) -> int:
        async with self._db.session() as db:
            result = await db.execute(
                select(KvCounter.value)
                .where(KvCounter.key == key)
                .where(KvCounter.field == field),
            )
            return result.scalar_one_or_none() or 0

    async def _increment(self, key: str, field: str, amount: int) -> int:
        stmt = self._insert(KvCounter).values(key=key, field=field, value=amount)
        stmt = stmt.on_conflict_do_update(
            index_elements=["key", "field"],
            set_={"value": KvCounter.value + amount},
        )
        async with self._db.session() as db:
            await db.execute(stmt)
            result = await db.execute(
                select(KvCounter.value)
                .where(KvCounter.key == key)
                .where(KvCounter.field == field),
            )
            value = result.scalar_one()
            await db.commit()
        logger.debug(
            f"Incremented {key}[{field}] by {amount}", extra={"store_key": key},
        )
        return value
