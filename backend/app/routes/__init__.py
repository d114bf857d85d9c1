# Routes package init
"""
Noteful Backend: API Routes Package
===================================

Route Inventory:
    - folders.py: /folders, /folders/{folder_id}
    - notes.py:   /notes, /notes/{note_id}
    - health.py:  GET /health

Routes stay thin: read the request, check required fields, call a service,
shape the response. Row access lives in app.services.
"""
