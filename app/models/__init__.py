"""ORM Models — SQLAlchemy declarative models for relational entities and key/value tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Events, PACs and politicians are read-only for the API; admin tooling writes them

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.politician import Politician  # noqa: F401
from app.models.event import Event  # noqa: F401
from app.models.pac import Pac  # noqa: F401
from app.models.pac_event import PacEvent  # noqa: F401
from app.models.kv_entry import KvHashEntry, KvListEntry, KvCounter  # noqa: F401
