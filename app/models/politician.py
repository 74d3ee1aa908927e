"""Politician ORM — the subject of events; managed from the admin pages.

Invariants:
    - iden is the opaque string primary key shared with key/value counters
    - name is non-nullable
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Politician(Base):
    """Politician entity — owns events."""
    __tablename__ = "politicians"

    iden: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
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

    events: Mapped[list["Event"]] = relationship(
        "Event", back_populates="politician", cascade="all, delete-orphan",
    )
