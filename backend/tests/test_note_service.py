"""
Markdown Notes Backend - Note Service Unit Tests
==================================================

What:  NoteService rules: defaults, title validation, partial-update merge,
       conflict translation, HTML composition and lint short-circuits.
How:   Mostly against a real NoteStore on temporary SQLite; conflict paths
       and "processor not called" checks use mocks.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from markdown_notes.exceptions import ConcurrencyConflictError, DatabaseError, ValidationError
from markdown_notes.models.note import Note
from markdown_notes.schemas.note import ValidationResult
from markdown_notes.services.markdown_processor import MarkdownProcessor
from markdown_notes.services.note_service import NoteService
from markdown_notes.services.results import Conflict, NotFound


class FakeClock:
    """Returns a fixed time until moved with advance()."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(note_store, markdown_processor, clock):
    return NoteService(store=note_store, processor=markdown_processor, clock=clock)


class TestNoteServiceCreate:

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self, service):
        created = await service.create_note(title="Test", markdown_content="# Hi")

        fetched = await service.get_note(created.id)

        assert fetched.title == "Test"
        assert fetched.markdown_content == "# Hi"
        assert fetched.created_at == fetched.updated_at

    @pytest.mark.asyncio
    async def test_create_defaults(self, service):
        note = await service.create_note()

        assert note.title == "Untitled Note"
        assert note.markdown_content == ""

    @pytest.mark.asyncio
    async def test_create_with_null_title_uses_placeholder(self, service):
        note = await service.create_note(title=None, markdown_content="body")
        assert note.title == "Untitled Note"
        assert note.markdown_content == "body"

    @pytest.mark.asyncio
    async def test_create_uses_one_clock_read(self, service, clock):
        note = await service.create_note(title="Stamped")
        assert note.created_at == clock.now
        assert note.updated_at == clock.now

    @pytest.mark.asyncio
    async def test_create_accepts_title_at_limit(self, service):
        note = await service.create_note(title="x" * 100)
        assert len(note.title) == 100

    @pytest.mark.asyncio
    async def test_create_rejects_long_title(self, service, note_store):
        with pytest.raises(ValidationError, match="at most 100"):
            await service.create_note(title="x" * 101)
        assert await note_store.get_all() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   "])
    async def test_create_rejects_blank_title(self, service, title):
        with pytest.raises(ValidationError, match="required"):
            await service.create_note(title=title)

    @pytest.mark.asyncio
    async def test_create_wraps_store_failure(self, markdown_processor):
        from sqlalchemy.exc import OperationalError

        store = MagicMock()
        store.create = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("disk I/O error")))
        service = NoteService(store=store, processor=markdown_processor)

        with pytest.raises(DatabaseError):
            await service.create_note(title="Doomed")


class TestNoteServiceRead:

    @pytest.mark.asyncio
    async def test_get_missing_returns_not_found(self, service):
        assert await service.get_note(123) == NotFound(123)

    @pytest.mark.asyncio
    async def test_list_orders_by_updated_at_desc(self, service, clock):
        a = await service.create_note(title="A")
        clock.advance(seconds=1)
        b = await service.create_note(title="B")
        clock.advance(seconds=1)
        await service.update_note(a.id, markdown_content="touched")

        notes = await service.list_notes()

        assert [n.id for n in notes] == [a.id, b.id]

    @pytest.mark.asyncio
    async def test_html_renders_markdown(self, service):
        note = await service.create_note(title="Test", markdown_content="# Hi")

        html = await service.get_note_as_html(note.id)

        assert "<h1>Hi</h1>" in html

    @pytest.mark.asyncio
    async def test_html_of_empty_note_skips_processor(self, note_store):
        processor = MagicMock(spec=MarkdownProcessor)
        service = NoteService(store=note_store, processor=processor)
        note = await service.create_note(title="Blank")

        assert await service.get_note_as_html(note.id) == ""
        processor.render.assert_not_called()

    @pytest.mark.asyncio
    async def test_html_of_missing_note(self, service):
        assert await service.get_note_as_html(9) == NotFound(9)


class TestNoteServiceLint:

    def setup_method(self):
        self.processor = MagicMock(spec=MarkdownProcessor)
        self.service = NoteService(store=MagicMock(), processor=self.processor)

    def test_lint_none_short_circuits(self):
        result = self.service.lint_markdown(None)

        assert result.is_valid is True
        self.processor.validate.assert_not_called()

    def test_lint_delegates_to_processor(self):
        verdict = ValidationResult(is_valid=False, message="Invalid Markdown syntax.", error_detail="boom")
        self.processor.validate.return_value = verdict

        assert self.service.lint_markdown("# x") is verdict
        self.processor.validate.assert_called_once_with("# x")

    def test_lint_does_not_touch_store(self):
        store = MagicMock()
        service = NoteService(store=store, processor=MarkdownProcessor())

        assert service.lint_markdown("").is_valid is True
        assert service.lint_markdown("# Title\n\nBody").is_valid is True
        assert store.mock_calls == []


class TestNoteServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_title_only_keeps_content(self, service, clock):
        note = await service.create_note(title="Old", markdown_content="keep me")
        clock.advance(seconds=5)

        updated = await service.update_note(note.id, title="New")

        assert updated.title == "New"
        assert updated.markdown_content == "keep me"
        assert updated.updated_at == clock.now

    @pytest.mark.asyncio
    async def test_update_content_only_keeps_title(self, service):
        note = await service.create_note(title="Test", markdown_content="# Hi")
        before = note.updated_at

        updated = await service.update_note(note.id, markdown_content="# Bye")

        assert updated.title == "Test"
        assert updated.markdown_content == "# Bye"
        assert updated.updated_at > before

    @pytest.mark.asyncio
    async def test_update_with_nothing_still_refreshes_timestamp(self, service, clock):
        note = await service.create_note(title="Same", markdown_content="same")
        created_at = note.created_at
        clock.advance(minutes=1)

        updated = await service.update_note(note.id)

        assert updated.title == "Same"
        assert updated.markdown_content == "same"
        assert updated.created_at == created_at
        assert updated.updated_at == clock.now

    @pytest.mark.asyncio
    async def test_update_moves_forward_when_clock_stands_still(self, service):
        note = await service.create_note(title="Fast")
        first = note.updated_at

        updated = await service.update_note(note.id, title="Faster")

        assert updated.updated_at == first + timedelta(microseconds=1)

    @pytest.mark.asyncio
    async def test_update_empty_string_clears_content(self, service):
        note = await service.create_note(title="T", markdown_content="text")
        updated = await service.update_note(note.id, markdown_content="")
        assert updated.markdown_content == ""

    @pytest.mark.asyncio
    async def test_update_missing_note(self, service):
        assert await service.update_note(55, title="x") == NotFound(55)

    @pytest.mark.asyncio
    async def test_update_rejects_long_title_before_store(self):
        store = MagicMock()
        store.update = AsyncMock()
        service = NoteService(store=store, processor=MarkdownProcessor())

        with pytest.raises(ValidationError):
            await service.update_note(1, title="y" * 101)
        store.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_conflict_on_deleted_note_becomes_not_found(self):
        store = MagicMock()
        store.update = AsyncMock(return_value=Conflict(3))
        store.exists = AsyncMock(return_value=False)
        service = NoteService(store=store, processor=MarkdownProcessor())

        assert await service.update_note(3, title="late") == NotFound(3)

    @pytest.mark.asyncio
    async def test_conflict_on_existing_note_raises(self):
        store = MagicMock()
        store.update = AsyncMock(return_value=Conflict(4))
        store.exists = AsyncMock(return_value=True)
        service = NoteService(store=store, processor=MarkdownProcessor())

        with pytest.raises(ConcurrencyConflictError):
            await service.update_note(4, title="lost")
        store.update.assert_awaited_once()


class TestNoteServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, service):
        note = await service.create_note(title="Gone")

        assert await service.delete_note(note.id) is True
        assert await service.get_note(note.id) == NotFound(note.id)

    @pytest.mark.asyncio
    async def test_delete_twice_is_not_found(self, service):
        note = await service.create_note(title="Twice")
        await service.delete_note(note.id)

        assert await service.delete_note(note.id) == NotFound(note.id)


class TestNoteServiceScenario:

    @pytest.mark.asyncio
    async def test_create_render_update_delete(self, service, clock):
        note = await service.create_note(title="Test", markdown_content="# Hi")
        assert isinstance(note, Note)
        assert note.id is not None

        assert "<h1>Hi</h1>" in await service.get_note_as_html(note.id)

        before = note.updated_at
        clock.advance(seconds=1)
        await service.update_note(note.id, markdown_content="# Bye")
        updated = await service.get_note(note.id)
        assert updated.title == "Test"
        assert updated.markdown_content == "# Bye"
        assert updated.updated_at > before

        await service.delete_note(note.id)
        assert await service.get_note(note.id) == NotFound(note.id)
