"""
LinguaCorp API — Services Layer
================================

What:  Phrase stores sitting behind the phrase endpoints.

Service Inventory:
    - PhraseService (abstract): list/get/create/update/delete contract
    - InMemoryPhraseService: dict-backed store, the default
    - SqlPhraseService: async SQLAlchemy store on the `phrases` table

The concrete store is chosen from PHRASE_STORE by build_phrase_service() and
handed to the application factory.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from linguacorp.config import Settings
from linguacorp.services.memory_store import InMemoryPhraseService
from linguacorp.services.phrase_base import PhraseService
from linguacorp.services.sql_store import SqlPhraseService

__all__ = [
    "PhraseService",
    "InMemoryPhraseService",
    "SqlPhraseService",
    "build_phrase_service",
]


def build_phrase_service(
    settings: Settings,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> PhraseService:
    """Returns the store selected by settings.phrase_store."""
    if settings.uses_database:
        if session_factory is None:
            raise ValueError("PHRASE_STORE=database requires a session factory")
        return SqlPhraseService(session_factory)
    return InMemoryPhraseService()
