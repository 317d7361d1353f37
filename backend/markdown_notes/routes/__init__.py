# Routes package init
"""
Markdown Notes Backend - API Routes Package
=============================================

Route Inventory:
    - notes.py:   /api/notes CRUD, /api/notes/{id}/html, /api/notes/lint
    - health.py:  GET /health

Routes stay thin: they pull data out of the request, call NoteService and
pick the status code. Business rules live in services.
"""
