"""
Markdown Notes Backend - Pydantic Request/Response Schemas
============================================================

What:  The JSON contract between the frontend and the API.
How:   FastAPI validates request bodies against these models and serializes
       responses through them. Field names are snake_case in Python and
       camelCase on the wire (`markdownContent`, `createdAt`, ...).
Who:   Route handlers; `ValidationResult` is also returned by NoteService.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases that still accepts snake_case input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(CamelModel):
    """
    Body of POST /api/notes.

    Both fields are optional; NoteService fills in "Untitled Note" and an
    empty body. Title length is checked by the service (400), not here (422).
    """
    title: Optional[str] = Field(default=None, description="Note title (max 100 characters)")
    markdown_content: Optional[str] = Field(default=None, description="Markdown body")


class NoteUpdateRequest(CamelModel):
    """
    Body of PUT /api/notes/{id}.

    Partial update: a null or missing field leaves the stored value as is.
    There is no way to express "clear this field" other than sending "".
    """
    title: Optional[str] = Field(default=None, description="New title, or null to keep")
    markdown_content: Optional[str] = Field(default=None, description="New body, or null to keep")


class LintRequest(CamelModel):
    """Body of POST /api/notes/lint."""
    markdown_text: Optional[str] = Field(default=None, description="Markdown source to check")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(CamelModel):
    """Full representation of a note, returned by list/get/create."""
    id: int = Field(description="Unique note identifier")
    title: str = Field(description="Note title")
    markdown_content: str = Field(description="Markdown source")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last modification timestamp (UTC ISO 8601)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ValidationResult(CamelModel):
    """
    Outcome of a markdown syntax check.

    is_valid=True only means the parser accepted the document; it says
    nothing about style. `error_detail` carries the parser's message and is
    serialized as `error`, the key the frontend reads.
    """
    is_valid: bool = Field(description="Whether the markdown parsed successfully")
    message: str = Field(description="Human-readable verdict")
    error_detail: Optional[str] = Field(
        default=None,
        alias="error",
        description="Parser error text when is_valid is false",
    )


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body produced by the exception handlers.

    Example:
        {
            "error": "not_found",
            "message": "Note with ID 42 not found.",
            "request_id": "1f3a9c2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """Health check response for GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


NoteListResponse = List[NoteResponse]
