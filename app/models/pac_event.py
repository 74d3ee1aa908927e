"""PacEvent ORM — a PAC's stance (support/oppose) on one event.

Invariants:
    - (event_iden, pac_iden) is unique: a PAC sits on one side of an event at most
    - Both foreign keys cascade on delete
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class PacEvent(Base):
    __tablename__ = "pac_events"
    __table_args__ = (
        UniqueConstraint("event_iden", "pac_iden", name="uq_pac_event"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_iden: Mapped[str] = mapped_column(
        String(64), ForeignKey("events.iden", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    pac_iden: Mapped[str] = mapped_column(
        String(64), ForeignKey("pacs.iden", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    support: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    event: Mapped["Event"] = relationship("Event", back_populates="pac_events")
    pac: Mapped["Pac"] = relationship("Pac", back_populates="pac_events")
