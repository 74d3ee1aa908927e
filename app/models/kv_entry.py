"""Key/Value Tables — hash fields, list items and counters behind the KeyValueStore port.

Invariants:
    - (key, field) is the primary key of hash entries and counters
    - List order is insertion order by autoincrement id; newest has the highest id
    - Counter values only ever grow through UPDATE value = value + n

Design Decisions:
    - Counters separate from hash entries: integer column, atomic in-database
      arithmetic, no read-modify-write in Python
    - Plain (non-hash) counters use field "" so one table serves both
"""

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class KvHashEntry(Base):
    __tablename__ = "kv_hash_entries"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    field: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class KvListEntry(Base):
    __tablename__ = "kv_list_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


class KvCounter(Base):
    __tablename__ = "kv_counters"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    field: Mapped[str] = mapped_column(String(255), primary_key=True, default="")
    value: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
