"""
Noteful Backend: Application Package
====================================

A JSON/HTTP API over folders and the notes they contain.

Layers:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, required fields, status codes
    ├─────────────────────────────────────┤
    │  Services (data access, validation, │  ← one statement per call, pure checks
    │            sanitizing)              │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async engine, session per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
