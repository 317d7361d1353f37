# Services package init
"""
Markdown Notes Backend - Services Layer
=========================================

Service Inventory:
    - MarkdownProcessor: markdown → HTML rendering and syntax validation
    - NoteStore: persistence of Note rows with optimistic-concurrency updates
    - NoteService: defaults, merge policy and conflict handling over the two

Services know nothing about HTTP. Routes build a NoteService per request
and translate its result values into status codes.
"""
