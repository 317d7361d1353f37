"""
Markdown Notes Backend - Notes Route Handlers
===============================================

What:  /api/notes CRUD plus the HTML and lint views.
How:   Each handler gets a request-scoped NoteService, calls one operation
       and maps NotFound results to NotFoundError (404 via the global
       handler). Everything else is the service's business.

Route Inventory:
    GET    /api/notes             list, most recently updated first
    POST   /api/notes             create (201 + Location)
    POST   /api/notes/lint        markdown syntax check (200 / 400)
    GET    /api/notes/{id}        single note
    GET    /api/notes/{id}/html   rendered HTML
    PUT    /api/notes/{id}        partial update (204)
    DELETE /api/notes/{id}        delete (204)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from markdown_notes.database import get_db_session
from markdown_notes.exceptions import NotFoundError
from markdown_notes.schemas.note import (
    ErrorResponse,
    LintRequest,
    NoteCreateRequest,
    NoteListResponse,
    NoteResponse,
    NoteUpdateRequest,
    ValidationResult,
)
from markdown_notes.services.markdown_processor import MarkdownProcessor
from markdown_notes.services.note_service import NoteService
from markdown_notes.services.note_store import NoteStore
from markdown_notes.services.results import NotFound

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])

# Parser construction compiles its rule chains; one instance serves all requests
_processor = MarkdownProcessor()


def get_markdown_processor() -> MarkdownProcessor:
    return _processor


def get_note_service(
    db: AsyncSession = Depends(get_db_session),
    processor: MarkdownProcessor = Depends(get_markdown_processor),
) -> NoteService:
    """Builds a NoteService bound to this request's database session."""
    return NoteService(store=NoteStore(db), processor=processor)


def _not_found(result: NotFound) -> NotFoundError:
    return NotFoundError(resource="note", resource_id=str(result.note_id))


@router.get(
    "/notes",
    response_model=NoteListResponse,
    responses={
        404: {"description": "Notes table is missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List all notes, most recently updated first",
)
async def list_notes(service: NoteService = Depends(get_note_service)):
    return await service.list_notes()


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        400: {"description": "Title is blank or too long", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    body: NoteCreateRequest,
    request: Request,
    response: Response,
    service: NoteService = Depends(get_note_service),
):
    """
    Create a note. Omitted fields default to "Untitled Note" and "".

    The Location header points at GET /api/notes/{id} for the new note.
    """
    note = await service.create_note(title=body.title, markdown_content=body.markdown_content)
    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id).path)
    return note


@router.post(
    "/notes/lint",
    response_model=ValidationResult,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Markdown failed to parse", "model": ValidationResult},
    },
    summary="Check markdown syntax",
)
async def lint_markdown(
    body: LintRequest,
    service: NoteService = Depends(get_note_service),
):
    """
    Parse the submitted markdown and report the verdict.

    A parse failure is answered with 400 and `{isValid: false, message, error}`.
    Passing only means the parser accepted the text, not that it is well styled.
    """
    result = service.lint_markdown(body.markdown_text)
    if not result.is_valid:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )
    return result


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by ID",
)
async def get_note(note_id: int, service: NoteService = Depends(get_note_service)):
    result = await service.get_note(note_id)
    if isinstance(result, NotFound):
        raise _not_found(result)
    return result


@router.get(
    "/notes/{note_id}/html",
    response_class=HTMLResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a note rendered as HTML",
)
async def get_note_as_html(note_id: int, service: NoteService = Depends(get_note_service)):
    """Returns the rendered body; an empty note yields an empty 200 response."""
    result = await service.get_note_as_html(note_id)
    if isinstance(result, NotFound):
        raise _not_found(result)
    return HTMLResponse(content=result)


@router.put(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"description": "Title is blank or too long", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Unresolved concurrent modification", "model": ErrorResponse},
    },
    summary="Partially update a note",
)
async def update_note(
    note_id: int,
    body: NoteUpdateRequest,
    service: NoteService = Depends(get_note_service),
) -> Response:
    """Fields sent as null or left out keep their stored values."""
    result = await service.update_note(
        note_id,
        title=body.title,
        markdown_content=body.markdown_content,
    )
    if isinstance(result, NotFound):
        raise _not_found(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(note_id: int, service: NoteService = Depends(get_note_service)) -> Response:
    result = await service.delete_note(note_id)
    if isinstance(result, NotFound):
        raise _not_found(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
