"""
LinguaCorp API — Abstract Phrase Service Interface
===================================================

What:  Abstract base class defining the contract every phrase store implements.
How:   Concrete stores inherit from PhraseService; route handlers depend only on
       this interface and receive the instance from the application factory.
Who:   Called by the phrase route handlers.

Result Contract:
    A missing phrase is a normal result, not an error:
        get_by_id → None
        update    → False
        delete    → False
    Anything a store raises is treated by the caller as an internal failure.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from linguacorp.schemas.phrase import Phrase, PhraseCandidate


class PhraseService(ABC):
    """
    Persistence contract for phrases.

    Implementations:
        - InMemoryPhraseService: process-local, default
        - SqlPhraseService: SQL table via async SQLAlchemy

    Callers pass only candidates that already passed validate_phrase().
    """

    @abstractmethod
    async def list_all(self) -> List[Phrase]:
        """
        Return every stored phrase, ordered by id.

        Returns an empty list when the store is empty; never None.
        """
        ...

    @abstractmethod
    async def get_by_id(self, phrase_id: int) -> Optional[Phrase]:
        """Return the phrase with this id, or None if there is none."""
        ...

    @abstractmethod
    async def create(self, candidate: PhraseCandidate) -> Phrase:
        """
        Store a new phrase and return it with its assigned id.

        Ids are positive, unique, and not reused after a delete.
        """
        ...

    @abstractmethod
    async def update(self, phrase_id: int, candidate: PhraseCandidate) -> bool:
        """
        Overwrite every field of an existing phrase, keeping its id.

        Returns:
            True if the phrase existed and was updated, False otherwise.
        """
        ...

    @abstractmethod
    async def delete(self, phrase_id: int) -> bool:
        """Remove a phrase. Returns False if no phrase had this id."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check that the store can serve requests.

        Who:     Called by the health check endpoint.
        Returns: True if reachable, False otherwise (never raises).
        """
        ...

    async def close(self) -> None:
        """Release store resources on shutdown. Default: nothing to release."""
        return None
