"""
Postboard: Application Package
==============================

What: A small REST API for blog posts (create, list, read, partial update, delete).
Who:  Imported by uvicorn (`postboard.main:app`), Alembic, and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← status codes, id checks, response shape
    ├─────────────────────────────────────┤
    │       Repositories (Persistence)    │  ← document-style operations on posts
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Sessions)          │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never hold a repository globally; a repository is built per request
    from the session dependency, so tests can swap either one.
"""

__version__ = "1.0.0"
