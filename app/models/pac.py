"""PAC ORM — political action committee referenced by contributions. Read-only here."""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Pac(Base):
    __tablename__ = "pacs"

    iden: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    pac_events: Mapped[list["PacEvent"]] = relationship(
        "PacEvent", back_populates="pac", cascade="all, delete-orphan",
    )
