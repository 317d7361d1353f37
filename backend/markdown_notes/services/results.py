"""
Markdown Notes Backend - Store and Service Result Values
==========================================================

Typed outcomes that callers branch on instead of catching exceptions.

    NotFound   the note id does not exist (any operation)
    Conflict   a conditional update matched no row (NoteStore.update only)
    NoteDraft  the mutable part of a note, handed to update mutators
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NotFound:
    note_id: int


@dataclass(frozen=True)
class Conflict:
    note_id: int


@dataclass(frozen=True)
class NoteDraft:
    """Snapshot of a note's mutable fields; mutators return a new one."""
    title: str
    markdown_content: str
    updated_at: datetime
