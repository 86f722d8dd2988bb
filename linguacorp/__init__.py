"""
LinguaCorp API — Application Package Initializer
=================================================

What: Marks the `linguacorp` directory as a Python package.
Who:  Imported by uvicorn (`linguacorp.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Routes (Phrase endpoints)      │  ← API key, shape checks, status mapping
    ├─────────────────────────────────────┤
    │      Services (Phrase stores)       │  ← Persistence and id assignment
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch storage directly; they talk to a PhraseService handed
    to the application factory.
"""

__version__ = "1.0.0"
