"""Create notes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

Creates `notes` (integer id, title, markdown body, UTC timestamps) and the
index backing the "most recently updated first" listing.

Rollback: downgrade() drops the table and all notes in it.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            "title",
            sa.String(100),
            nullable=False,
            comment="Note title, at most 100 characters",
        ),
        sa.Column(
            "markdown_content",
            sa.Text(),
            nullable=False,
            server_default=sa.text("''"),
            comment="Markdown source of the note body",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="Last successful mutation (UTC); also the optimistic concurrency token",
        ),
        sa.PrimaryKeyConstraint("id"),
        # Keeps SQLite from reusing the ids of deleted notes
        sqlite_autoincrement=True,
    )

    op.create_index(
        "idx_notes_updated_at",
        "notes",
        [sa.text("updated_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_notes_updated_at", table_name="notes")
    op.drop_table("notes")
