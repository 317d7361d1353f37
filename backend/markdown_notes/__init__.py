"""
Markdown Notes Backend - Application Package Initializer
=========================================================

What: Marks the `markdown_notes` directory as a Python package.
Who:  Imported by uvicorn (`markdown_notes.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   NoteService (Business Logic)      │  ← defaults, merge policy, conflicts
    ├──────────────────┬──────────────────┤
    │    NoteStore     │ MarkdownProcessor│  ← persistence / render + lint
    ├──────────────────┴──────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Services never import the routes package; they receive their session
    and collaborators through constructors.
"""

__version__ = "1.0.0"
