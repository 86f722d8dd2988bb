"""
LinguaCorp API — SQL Phrase Store
==================================

What:  PhraseService backed by the `phrases` table (PHRASE_STORE=database).
How:   Each operation opens its own AsyncSession from the injected factory,
       commits on success and rolls back on any error. Ids come from the
       database's integer primary key.
Who:   Built by build_phrase_service() with the factory from linguacorp.database.

Errors:
    SQLAlchemy exceptions are not caught here. The route handlers log them and
    answer 500 with a fixed message.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from linguacorp.models.phrase import PhraseRecord
from linguacorp.schemas.phrase import Phrase, PhraseCandidate
from linguacorp.services.phrase_base import PhraseService

logger = logging.getLogger(__name__)


class SqlPhraseService(PhraseService):
    """
    Phrase store on async SQLAlchemy.

    Query patterns:
        - list:   SELECT ... ORDER BY id
        - by id:  primary key lookup (session.get)
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One session per operation.

        Commits when the block finishes, rolls back and re-raises on error,
        and always closes the session.
        """
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def list_all(self) -> List[Phrase]:
        async with self._session() as session:
            result = await session.execute(select(PhraseRecord).order_by(PhraseRecord.id))
            return [Phrase.model_validate(record) for record in result.scalars().all()]

    async def get_by_id(self, phrase_id: int) -> Optional[Phrase]:
        async with self._session() as session:
            record = await session.get(PhraseRecord, phrase_id)
            if record is None:
                return None
            return Phrase.model_validate(record)

    async def create(self, candidate: PhraseCandidate) -> Phrase:
        async with self._session() as session:
            record = PhraseRecord(
                original_text=candidate.original_text,
                language=candidate.language,
                translated_text=candidate.translated_text or "",
            )
            session.add(record)
            # Flush assigns the primary key before the commit
            await session.flush()
            phrase = Phrase.model_validate(record)
        logger.debug("Inserted phrase %d", phrase.id)
        return phrase

    async def update(self, phrase_id: int, candidate: PhraseCandidate) -> bool:
        async with self._session() as session:
            record = await session.get(PhraseRecord, phrase_id)
            if record is None:
                return False
            record.original_text = candidate.original_text
            record.language = candidate.language
            record.translated_text = candidate.translated_text or ""
            return True

    async def delete(self, phrase_id: int) -> bool:
        async with self._session() as session:
            record = await session.get(PhraseRecord, phrase_id)
            if record is None:
                return False
            await session.delete(record)
            return True

    async def health_check(self) -> bool:
        try:
            async with self._session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Phrase store health check failed: %s", str(e))
            return False
