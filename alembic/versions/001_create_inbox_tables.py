"""Create inbox_entries and generated_cards tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create inbox tables."""
    op.create_table(
        "inbox_entries",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("content_type", sa.String(length=16), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("preview", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=True),
        sa.Column("extracted_text", sa.Text(), nullable=True),
        sa.Column("deck_name", sa.String(length=255), nullable=True),
        sa.Column("is_locked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_inbox_entries_created_at"), "inbox_entries", ["created_at"], unique=False
    )

    op.create_table(
        "generated_cards",
        sa.Column("id", sa.String(length=128), nullable=False),
        sa.Column("entry_id", sa.String(length=64), nullable=False),
        sa.Column("front", sa.Text(), nullable=False),
        sa.Column("back", sa.Text(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="pending"),
        sa.Column("external_note_id", sa.BigInteger(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.ForeignKeyConstraint(
            ["entry_id"],
            ["inbox_entries.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_generated_cards_entry_id"), "generated_cards", ["entry_id"], unique=False
    )
    op.create_index(
        op.f("ix_generated_cards_status"), "generated_cards", ["status"], unique=False
    )


def downgrade() -> None:
    """Drop inbox tables."""
    op.drop_index(op.f("ix_generated_cards_status"), table_name="generated_cards")
    op.drop_index(op.f("ix_generated_cards_entry_id"), table_name="generated_cards")
    op.drop_table("generated_cards")
    op.drop_index(op.f("ix_inbox_entries_created_at"), table_name="inbox_entries")
    op.drop_table("inbox_entries")
