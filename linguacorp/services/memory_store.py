"""
LinguaCorp API — In-Memory Phrase Store
========================================

What:  Dict-backed PhraseService; the default store (PHRASE_STORE=memory).
How:   Phrases are kept in a dict keyed by id. Ids come from a counter that
       starts at 1 and only moves forward, so a deleted id is never handed out
       again. An asyncio.Lock serializes mutations.

Data does not survive a restart.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from linguacorp.schemas.phrase import Phrase, PhraseCandidate
from linguacorp.services.phrase_base import PhraseService

logger = logging.getLogger(__name__)


class InMemoryPhraseService(PhraseService):

    def __init__(self) -> None:
        self._phrases: Dict[int, Phrase] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def list_all(self) -> List[Phrase]:
        return [self._phrases[key].model_copy() for key in sorted(self._phrases)]

    async def get_by_id(self, phrase_id: int) -> Optional[Phrase]:
        phrase = self._phrases.get(phrase_id)
        return phrase.model_copy() if phrase is not None else None

    async def create(self, candidate: PhraseCandidate) -> Phrase:
        async with self._lock:
            phrase = Phrase.from_candidate(self._next_id, candidate)
            self._phrases[phrase.id] = phrase
            self._next_id += 1
        logger.debug("Stored phrase %d in memory", phrase.id)
        return phrase.model_copy()

    async def update(self, phrase_id: int, candidate: PhraseCandidate) -> bool:
        async with self._lock:
            if phrase_id not in self._phrases:
                return False
            self._phrases[phrase_id] = Phrase.from_candidate(phrase_id, candidate)
        return True

    async def delete(self, phrase_id: int) -> bool:
        async with self._lock:
            return self._phrases.pop(phrase_id, None) is not None

    async def health_check(self) -> bool:
        return True
