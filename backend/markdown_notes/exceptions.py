"""
Markdown Notes Backend - Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions carrying a client-safe message and a
       context dict that is logged but never returned to clients.
Who:   Raised by services and routes; turned into JSON responses by the
       handlers registered in main.py.

Exception Hierarchy:
    MarkdownNotesError (base)
    ├── ValidationError           → 400 Bad Request (title empty or too long)
    ├── NotFoundError             → 404 Not Found
    ├── TableMissingError         → 404 Not Found (backing table absent)
    ├── ConcurrencyConflictError  → 500 Internal Server Error
    └── DatabaseError             → 500 Internal Server Error

Expected outcomes of the note service (a missing note, a markdown document
that fails to parse) are returned as values, not raised. NotFoundError only
appears once the HTTP layer has decided to answer with a 404.
"""

from typing import Any, Dict, Optional


class MarkdownNotesError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MarkdownNotesError):
    """
    Raised when a note would violate a persistence constraint.

    When:  Title is blank or longer than the column allows. Checked by
           NoteService before anything reaches the store.
    HTTP:  400 Bad Request
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(MarkdownNotesError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID {resource_id} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class TableMissingError(MarkdownNotesError):
    """
    Raised when the `notes` table itself is absent (migrations not applied).

    HTTP: 404 Not Found
    """

    def __init__(
        self,
        table: str = "notes",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["table"] = table
        super().__init__(message=f"{table.capitalize()} table is not found.", context=ctx)
        self.table = table


class ConcurrencyConflictError(MarkdownNotesError):
    """
    Raised when an update lost a race against another writer and the note
    still exists.

    Not user-actionable; the request fails and nothing is retried.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        note_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if note_id is not None:
            ctx["note_id"] = note_id
        super().__init__(
            message="The note was modified concurrently and could not be saved.",
            context=ctx,
        )
        self.note_id = note_id


class DatabaseError(MarkdownNotesError):
    """
    Raised when database operations fail unexpectedly.

    The client always receives a generic message; the underlying error type
    goes into `context` for the server log.
    HTTP: 500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
