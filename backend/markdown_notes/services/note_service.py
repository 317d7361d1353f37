"""
Markdown Notes Backend - Note Service (Business Logic)
========================================================

What:  The contract the HTTP layer talks to: list, create, get, render,
       lint, update and delete notes.
How:   Composes a NoteStore (persistence) and a MarkdownProcessor
       (render/lint). Both are constructor arguments; one service instance
       lives for one request.
Who:   Route handlers via the `get_note_service` dependency.

Rules owned here:
    - Defaults on create: title "Untitled Note", markdown_content ""
    - Title must be non-blank and at most 100 characters, checked before
      the store sees the note
    - Partial update: None means "keep the stored value"; updated_at is
      refreshed even when nothing else changes
    - A store Conflict becomes NotFound if the note was deleted meanwhile,
      otherwise ConcurrencyConflictError
    - Missing notes are returned as NotFound values, never raised
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from markdown_notes.exceptions import (
    ConcurrencyConflictError,
    DatabaseError,
    ValidationError,
)
from markdown_notes.models.note import DEFAULT_TITLE, TITLE_MAX_LENGTH, Note
from markdown_notes.schemas.note import ValidationResult
from markdown_notes.services.markdown_processor import MarkdownProcessor, empty_result
from markdown_notes.services.note_store import NoteStore
from markdown_notes.services.results import Conflict, NoteDraft, NotFound

logger = logging.getLogger(__name__)

# Smallest step the timestamp columns can represent
_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_title(title: str) -> None:
    """
    Raises ValidationError if `title` cannot be stored.

    Blank titles count as missing: the column is required.
    """
    if not title.strip():
        raise ValidationError(message="The Title field is required.", field="title")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            message=f"The Title field must be at most {TITLE_MAX_LENGTH} characters.",
            field="title",
            context={"length": len(title), "max_length": TITLE_MAX_LENGTH},
        )


class NoteService:
    """
    Note operations behind a stable contract.

    Args:
        store:     NoteStore bound to the current request's session
        processor: MarkdownProcessor used for HTML rendering and linting
        clock:     Returns the current UTC time; swappable in tests
    """

    def __init__(
        self,
        store: NoteStore,
        processor: MarkdownProcessor,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.processor = processor
        self.clock = clock

    async def list_notes(self) -> List[Note]:
        """All notes, most recently updated first."""
        try:
            return await self.store.get_all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", e, exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def create_note(
        self,
        title: Optional[str] = None,
        markdown_content: Optional[str] = None,
    ) -> Note:
        """
        Create a note, filling in defaults for omitted fields.

        Both timestamps come from one clock read, so created_at == updated_at.

        Raises:
            ValidationError: title is blank or longer than 100 characters
            DatabaseError:   the insert failed
        """
        title = DEFAULT_TITLE if title is None else title
        markdown_content = "" if markdown_content is None else markdown_content
        validate_title(title)

        now = self.clock()
        note = Note(
            title=title,
            markdown_content=markdown_content,
            created_at=now,
            updated_at=now,
        )
        try:
            note = await self.store.create(note)
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", e, exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created (%d chars)", note.id, len(markdown_content))
        return note

    async def get_note(self, note_id: int) -> Union[Note, NotFound]:
        note = await self.store.get_by_id(note_id)
        if note is None:
            logger.info("Note %s not found", note_id)
            return NotFound(note_id)
        return note

    async def get_note_as_html(self, note_id: int) -> Union[str, NotFound]:
        """
        Render a note's markdown to HTML.

        An empty body short-circuits to "" without calling the processor.
        """
        note = await self.get_note(note_id)
        if isinstance(note, NotFound):
            return note
        if not note.markdown_content:
            return ""
        return self.processor.render(note.markdown_content)

    def lint_markdown(self, markdown_text: Optional[str]) -> ValidationResult:
        """Check markdown syntax. Pure: never touches the store."""
        if markdown_text is None:
            return empty_result()
        return self.processor.validate(markdown_text)

    async def update_note(
        self,
        note_id: int,
        title: Optional[str] = None,
        markdown_content: Optional[str] = None,
    ) -> Union[Note, NotFound]:
        """
        Partially update a note.

        Fields left as None keep their stored values. updated_at always moves
        forward, at least one microsecond past the stored value.

        Raises:
            ValidationError:          new title is blank or too long
            ConcurrencyConflictError: another writer changed the note first
        """
        if title is not None:
            validate_title(title)

        def merge(current: NoteDraft) -> NoteDraft:
            return replace(
                current,
                title=current.title if title is None else title,
                markdown_content=(
                    current.markdown_content if markdown_content is None else markdown_content
                ),
                updated_at=max(self.clock(), current.updated_at + _TICK),
            )

        outcome = await self.store.update(note_id, merge)

        if isinstance(outcome, NotFound):
            logger.info("Note %s not found for update", note_id)
            return outcome

        if isinstance(outcome, Conflict):
            if not await self.store.exists(note_id):
                logger.warning("Note %s was deleted during update", note_id)
                return NotFound(note_id)
            logger.error("Unresolved concurrent update of note %s", note_id)
            raise ConcurrencyConflictError(note_id=note_id)

        logger.info("Note %s updated", note_id)
        return outcome

    async def delete_note(self, note_id: int) -> Union[bool, NotFound]:
        """Hard-delete a note. Returns True, or NotFound if it did not exist."""
        if not await self.store.delete(note_id):
            logger.info("Note %s not found for delete", note_id)
            return NotFound(note_id)
        logger.info("Note %s deleted", note_id)
        return True
