"""
Markdown Notes Backend - Note Store (Persistence)
===================================================

What:  Durable collection of Note rows keyed by integer id.
How:   Thin layer over one AsyncSession. The session is passed in by the
       caller and scoped to a single request; the store never commits.
Who:   NoteService only.

Optimistic Concurrency:
    `update` reads the row, lets the caller's mutator compute the next
    version, then writes with

        UPDATE notes SET ... WHERE id = :id AND updated_at = :read_updated_at

    `updated_at` doubles as the version token. If another writer committed
    in between, no row matches and the store returns Conflict instead of
    overwriting. There is no automatic retry.
"""

import logging
from typing import Callable, List, Optional, Union

from sqlalchemy import asc, delete, desc, inspect, select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from markdown_notes.exceptions import TableMissingError
from markdown_notes.models.note import Note
from markdown_notes.services.results import Conflict, NoteDraft, NotFound

logger = logging.getLogger(__name__)

Mutator = Callable[[NoteDraft], NoteDraft]


class NoteStore:
    """
    CRUD access to the `notes` table.

    Args:
        session: Request-scoped async session; commit/rollback belongs to
                 whoever created it (get_db_session in the API).
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, note: Note) -> Note:
        """Insert a note and flush so the database assigns its id."""
        self.session.add(note)
        await self.session.flush()
        logger.debug("Inserted note %s", note.id)
        return note

    async def get_all(self) -> List[Note]:
        """
        All notes, most recently updated first.

        Ties on updated_at keep insertion order (ascending id).

        Raises:
            TableMissingError: the `notes` table does not exist
        """
        query = select(Note).order_by(desc(Note.updated_at), asc(Note.id))
        try:
            result = await self.session.execute(query)
        except DBAPIError as e:
            # PostgreSQL aborts the transaction on error; start over before probing
            await self.session.rollback()
            if not await self.table_exists():
                raise TableMissingError(table=Note.__tablename__) from e
            raise
        return list(result.scalars().all())

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        return await self.session.get(Note, note_id)

    async def exists(self, note_id: int) -> bool:
        """Whether the row exists right now (always queries, skips the identity map)."""
        result = await self.session.execute(select(Note.id).where(Note.id == note_id))
        return result.scalar_one_or_none() is not None

    async def update(self, note_id: int, mutator: Mutator) -> Union[Note, NotFound, Conflict]:
        """
        Apply `mutator` to the current version of a note and persist the result
        only if nobody else changed the note since it was read.

        Returns:
            The refreshed Note on success, NotFound if the id is absent, or
            Conflict if the conditional write matched no row.
        """
        note = await self.session.get(Note, note_id, populate_existing=True)
        if note is None:
            return NotFound(note_id)

        current = NoteDraft(
            title=note.title,
            markdown_content=note.markdown_content,
            updated_at=note.updated_at,
        )
        changed = mutator(current)

        result = await self.session.execute(
            update(Note)
            .where(Note.id == note_id, Note.updated_at == current.updated_at)
            .values(
                title=changed.title,
                markdown_content=changed.markdown_content,
                updated_at=changed.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.warning("Conditional update of note %s matched no row", note_id)
            return Conflict(note_id)

        await self.session.refresh(note)
        return note

    async def delete(self, note_id: int) -> bool:
        """Hard-delete a note. Returns False when there was nothing to delete."""
        result = await self.session.execute(delete(Note).where(Note.id == note_id))
        return result.rowcount == 1

    async def table_exists(self) -> bool:
        connection = await self.session.connection()
        return await connection.run_sync(
            lambda sync_conn: inspect(sync_conn).has_table(Note.__tablename__)
        )
