"""
Markdown Notes Backend - Note SQLAlchemy Model
================================================

What:  ORM model for the `notes` table.
Who:   Written only through NoteStore; Alembic's autogenerate reads it too.

Table Design:
    - Integer primary key with AUTOINCREMENT on SQLite so ids of deleted
      notes are never handed out again (PostgreSQL identity columns already
      behave this way)
    - title: VARCHAR(100), NOT NULL
    - markdown_content: TEXT, NOT NULL, empty string by default
    - created_at / updated_at: UTC, timezone-aware
    - Index on updated_at DESC backs the "most recently touched first" listing
"""

from datetime import datetime

from sqlalchemy import Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from markdown_notes.database import Base, UTCDateTime

TITLE_MAX_LENGTH = 100
DEFAULT_TITLE = "Untitled Note"


class Note(Base):
    """
    A markdown document with a title and timestamps.

    Lifecycle:
        1. Created by NoteService.create_note (id assigned, both timestamps equal)
        2. Mutated by NoteService.update_note (updated_at moves forward)
        3. Hard-deleted by NoteService.delete_note (no tombstone)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Store-assigned identifier, never reused",
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        default=DEFAULT_TITLE,
        comment="Note title, at most 100 characters",
    )

    markdown_content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
        comment="Markdown source of the note body",
    )

    # Both timestamps are supplied by NoteService; no server defaults so a
    # single clock read can set them to the same instant
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        comment="Last successful mutation (UTC); also the optimistic concurrency token",
    )

    __table_args__ = (
        Index("idx_notes_updated_at", updated_at.desc()),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, updated_at='{self.updated_at}')>"
