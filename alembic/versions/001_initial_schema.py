"""Initial schema — politicians, events, pacs, pac_events, key/value tables.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "politicians",
        sa.Column("iden", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "pacs",
        sa.Column("iden", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "events",
        sa.Column("iden", sa.String(64), primary_key=True),
        sa.Column(
            "politician_iden", sa.String(64),
            sa.ForeignKey("politicians.iden", ondelete="CASCADE"), nullable=True,
        ),
        sa.Column("headline", sa.String(500), nullable=False, server_default=""),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(2000), nullable=True),
        sa.Column("image_attribution", sa.String(500), nullable=True),
        sa.Column("is_pinned", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_events_politician_iden", "events", ["politician_iden"])

    op.create_table(
        "pac_events",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "event_iden", sa.String(64),
            sa.ForeignKey("events.iden", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "pac_iden", sa.String(64),
            sa.ForeignKey("pacs.iden", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("support", sa.Boolean, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("event_iden", "pac_iden", name="uq_pac_event"),
    )
    op.create_index("ix_pac_events_event_iden", "pac_events", ["event_iden"])
    op.create_index("ix_pac_events_pac_iden", "pac_events", ["pac_iden"])

    op.create_table(
        "kv_hash_entries",
        sa.Column("key", sa.String(255), primary_key=True),
        sa.Column("field", sa.String(255), primary_key=True),
        sa.Column("value", sa.Text, nullable=False),
    )

    op.create_table(
        "kv_list_entries",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("key", sa.String(255), nullable=False),
        sa.Column("value", sa.Text, nullable=False),
    )
    op.create_index("ix_kv_list_entries_key", "kv_list_entries", ["key"])

    op.create_table(
        "kv_counters",
        sa.Column("key", sa.String(255), primary_key=True),
        sa.Column("field", sa.String(255), primary_key=True, server_default=""),
        sa.Column("value", sa.BigInteger, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("kv_counters")
    op.drop_index("ix_kv_list_entries_key", table_name="kv_list_entries")
    op.drop_table("kv_list_entries")
    op.drop_table("kv_hash_entries")
    op.drop_index("ix_pac_events_pac_iden", table_name="pac_events")
    op.drop_index("ix_pac_events_event_iden", table_name="pac_events")
    op.drop_table("pac_events")
    op.drop_index("ix_events_politician_iden", table_name="events")
    op.drop_table("events")
    op.drop_table("pacs")
    op.drop_table("politicians")
