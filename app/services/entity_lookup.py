"""Entity Lookup Service — resolves idens to events, PACs, politicians and contributions.

Invariants:
    - get_event/get_pac return None for unknown idens (callers decide what missing means)
    - list_user_contributions preserves the stored newest-first order
    - Contribution idens with no stored record are skipped and logged, never fatal
    - Results reflect store state at call time; nothing is cached

Design Decisions:
    - Relational entities read through DatabaseSessionManager, ledger entries through
      the KeyValueStore port; both map failures to StorageError
"""

import logging

from sqlalchemy import select

from app.core import store_keys
from app.core.domain_types import EventIden, PacIden, UserIden
from app.core.records import ContributionRecord, EventRecord, PacRecord
from app.core.repository_protocols import KeyValueStore
from app.infrastructure.database import DatabaseSessionManager
from app.models.event import Event
from app.models.pac import Pac
from app.models.politician import Politician
from app.services.task_flow import gather_all

logger = logging.getLogger(__name__)

EVENT_CONTRIBUTIONS_LIMIT = 10


def _to_event_record(event: Event) -> EventRecord:
    return EventRecord(
        iden=event.iden,
        politician=event.politician_iden,
        support_pacs=tuple(pe.pac_iden for pe in event.pac_events if pe.support),
        oppose_pacs=tuple(pe.pac_iden for pe in event.pac_events if not pe.support),
    )


class EntityLookupService:
    """Read-only lookups over the relational and key/value stores."""

    def __init__(self, db: DatabaseSessionManager, store: KeyValueStore):
        self._db = db
        self._store = store

    async def get_event(self, event_iden: EventIden) -> EventRecord | None:
        async with self._db.session() as db:
            result = await db.execute(select(Event).where(Event.iden == event_iden))
            event = result.scalar_one_or_none()
            return _to_event_record(event) if event else None

    async def get_pac(self, pac_iden: PacIden) -> PacRecord | None:
        async with self._db.session() as db:
            result = await db.execute(select(Pac).where(Pac.iden == pac_iden))
            pac = result.scalar_one_or_none()
            return PacRecord(iden=pac.iden, name=pac.name) if pac else None

    async def list_user_contributions(self, user_iden: UserIden) -> list[ContributionRecord]:
        """Newest-first contributions for a user."""
        idens = await self._store.lrange(
            store_keys.user_reverse_chronological_contributions(user_iden),
        )
        raws = await gather_all(
            *(self._store.hget(store_keys.CONTRIBUTIONS, iden) for iden in idens),
        )
        contributions = []
        for iden, raw in zip(idens, raws):
            if raw is None:
                logger.warning(
                    f"Contribution {iden} listed for user but not stored",
                    extra={"user_iden": user_iden, "contribution_iden": iden},
                )
                continue
            contributions.append(ContributionRecord.model_validate_json(raw))
        return contributions

    async def list_politicians(self) -> list[dict]:
        async with self._db.session() as db:
            result = await db.execute(select(Politician).order_by(Politician.name))
            return [
                {"iden": p.iden, "name": p.name} for p in result.scalars().all()
            ]

    async def list_event_contributions(self, event_iden: EventIden) -> list[dict]:
        """Event rows matching the iden, most recent first, at most ten."""
        async with self._db.session() as db:
            result = await db.execute(
                select(Event)
                .where(Event.iden == event_iden)
                .order_by(Event.created_at.desc())
                .limit(EVENT_CONTRIBUTIONS_LIMIT),
            )
            return [
                {
                    "iden": e.iden,
                    "isPinned": e.is_pinned,
                    "imageUrl": e.image_url,
                    "imageAttribution": e.image_attribution,
                    "politicianIden": e.politician_iden,
                    "headline": e.headline,
                    "summary": e.summary,
                    "createdAt": e.created_at.isoformat(),
                    "updatedAt": e.updated_at.isoformat(),
                }
                for e in result.scalars().all()
            ]
