# Services package init
"""
Noteful Backend: Services Layer
===============================

Service Inventory:
    - FolderService: CRUD statements for the folders table
    - NoteService:   CRUD statements for the notes table
    - validators:    empty-name and required-field checks
    - sanitizer:     escapes markup in text leaving the API

Services take the session as an argument and know nothing about HTTP, so
they are unit-tested with a mocked AsyncSession.
"""
