"""Event ORM — a political event PACs take a position on.

Invariants:
    - politician_iden references politicians.iden (cascade delete)
    - A PAC's stance on the event lives in PacEvent rows, loaded eagerly

Design Decisions:
    - pac_events lazy="selectin": stance lists are needed on every lookup,
      async sessions cannot lazy-load
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Event(Base):
    """Event entity — referenced by contributions and their counters."""
    __tablename__ = "events"

    iden: Mapped[str] = mapped_column(String(64), primary_key=True)
    politician_iden: Mapped[str | None] = mapped_column(
        String(64),
        ForeignKey("politicians.iden", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    headline: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    image_attribution: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    politician: Mapped["Politician | None"] = relationship(
        "Politician", back_populates="events",
    )
    pac_events: Mapped[list["PacEvent"]] = relationship(
        "PacEvent", back_populates="event",
        cascade="all, delete-orphan", lazy="selectin",
    )
