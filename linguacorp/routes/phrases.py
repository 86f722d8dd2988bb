"""
LinguaCorp API — Phrase Route Handlers
=======================================

What:  CRUD endpoints for phrases under /api/phrases.
How:   Every handler runs the same four steps:
           1. API key check (router dependency, before anything else)
           2. Shape validation (id > 0, validate_phrase() on bodies)
           3. Store call
           4. Map the store result to a status code
       Failures are raised as application exceptions and rendered by the
       global handlers in main.py.

Route Inventory:
    GET    /api/phrases        200 list | 204 empty
    GET    /api/phrases/{id}   200 | 400 | 404
    POST   /api/phrases        201 + Location
    PUT    /api/phrases/{id}   200 | 400 | 404
    DELETE /api/phrases/{id}   204 | 400 | 404
    All of them: 401 on a bad key, 500 on a store failure.
"""

import logging
from typing import List, NoReturn

from fastapi import APIRouter, Depends, Response, status

from linguacorp.dependencies import get_phrase_service, require_api_key
from linguacorp.exceptions import NotFoundError, PhraseServiceError, ValidationError
from linguacorp.schemas.phrase import (
    ErrorResponse,
    Phrase,
    PhraseCandidate,
    validate_phrase,
)
from linguacorp.services.phrase_base import PhraseService

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "ID must be a positive integer."
LIST_ERROR_MESSAGE = "An error occurred while retrieving phrases."
GET_ERROR_MESSAGE = "An error occurred while retrieving the phrase."
SAVE_ERROR_MESSAGE = "An error occurred while saving the phrase."
DELETE_ERROR_MESSAGE = "An error occurred while deleting the phrase."

router = APIRouter(
    prefix="/api/phrases",
    tags=["Phrases"],
    dependencies=[Depends(require_api_key)],
    responses={
        401: {"description": "Missing or invalid X-API-KEY", "model": ErrorResponse},
        500: {"description": "Phrase store failure", "model": ErrorResponse},
    },
)


# ── Helpers ───────────────────────────────────────────────────────────────

def _ensure_positive_id(phrase_id: int) -> None:
    if phrase_id <= 0:
        logger.warning("Invalid ID %d provided", phrase_id)
        raise ValidationError(message=INVALID_ID_MESSAGE)


def _ensure_valid(candidate: PhraseCandidate) -> None:
    errors = validate_phrase(candidate)
    if errors:
        logger.warning("Phrase failed validation: %s", ", ".join(sorted(errors)))
        raise ValidationError(errors=errors)


def _store_failure(message: str, exc: Exception, **context) -> NoReturn:
    """Log a store exception with its traceback and raise the client-safe 500."""
    logger.error("%s Context: %s", message, context, exc_info=exc)
    raise PhraseServiceError(
        message=message,
        context={"error_type": type(exc).__name__, **context},
    ) from exc


# ── Endpoints ─────────────────────────────────────────────────────────────

@router.get(
    "",
    response_model=List[Phrase],
    responses={204: {"description": "No phrases stored"}},
    summary="List all phrases",
)
async def list_phrases(
    service: PhraseService = Depends(get_phrase_service),
):
    """
    Return every stored phrase.

    An empty store answers 204 with no body rather than 200 with [].
    """
    try:
        phrases = await service.list_all()
    except Exception as e:
        _store_failure(LIST_ERROR_MESSAGE, e)

    if not phrases:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return phrases


@router.get(
    "/{phrase_id}",
    response_model=Phrase,
    responses={
        400: {"description": "ID is not a positive integer", "model": ErrorResponse},
        404: {"description": "Phrase not found", "model": ErrorResponse},
    },
    summary="Get a single phrase by ID",
)
async def get_phrase(
    phrase_id: int,
    service: PhraseService = Depends(get_phrase_service),
) -> Phrase:
    logger.info("Request received to get phrase with ID %d", phrase_id)
    _ensure_positive_id(phrase_id)

    try:
        phrase = await service.get_by_id(phrase_id)
    except Exception as e:
        _store_failure(GET_ERROR_MESSAGE, e, phrase_id=phrase_id)

    if phrase is None:
        logger.warning("Phrase with ID %d not found", phrase_id)
        raise NotFoundError(resource_id=phrase_id)

    logger.info("Phrase with ID %d retrieved successfully", phrase_id)
    return phrase


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Phrase,
    responses={
        201: {"description": "Phrase created", "model": Phrase},
        400: {"description": "Invalid phrase fields", "model": ErrorResponse},
    },
    summary="Create a phrase",
)
async def create_phrase(
    candidate: PhraseCandidate,
    response: Response,
    service: PhraseService = Depends(get_phrase_service),
) -> Phrase:
    """
    Store a new phrase.

    The response body includes the server-assigned id and the Location header
    points at GET /api/phrases/{id}.
    """
    _ensure_valid(candidate)

    try:
        created = await service.create(candidate)
    except Exception as e:
        _store_failure(SAVE_ERROR_MESSAGE, e)

    logger.info("Phrase with ID %d created", created.id)
    response.headers["Location"] = f"{router.prefix}/{created.id}"
    return created


@router.put(
    "/{phrase_id}",
    response_model=Phrase,
    responses={
        400: {"description": "Invalid ID or phrase fields", "model": ErrorResponse},
        404: {"description": "Phrase not found", "model": ErrorResponse},
    },
    summary="Replace a phrase",
)
async def update_phrase(
    phrase_id: int,
    candidate: PhraseCandidate,
    service: PhraseService = Depends(get_phrase_service),
) -> Phrase:
    """Overwrite all fields of an existing phrase; the id never changes."""
    _ensure_positive_id(phrase_id)
    _ensure_valid(candidate)

    try:
        updated = await service.update(phrase_id, candidate)
    except Exception as e:
        _store_failure(SAVE_ERROR_MESSAGE, e, phrase_id=phrase_id)

    if not updated:
        logger.warning("Phrase with ID %d not found for update", phrase_id)
        raise NotFoundError(resource_id=phrase_id)

    logger.info("Phrase with ID %d updated", phrase_id)
    return Phrase.from_candidate(phrase_id, candidate)


@router.delete(
    "/{phrase_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "ID is not a positive integer", "model": ErrorResponse},
        404: {"description": "Phrase not found", "model": ErrorResponse},
    },
    summary="Delete a phrase",
)
async def delete_phrase(
    phrase_id: int,
    service: PhraseService = Depends(get_phrase_service),
) -> Response:
    _ensure_positive_id(phrase_id)

    try:
        deleted = await service.delete(phrase_id)
    except Exception as e:
        _store_failure(DELETE_ERROR_MESSAGE, e, phrase_id=phrase_id)

    if not deleted:
        logger.warning("Phrase with ID %d not found for delete", phrase_id)
        raise NotFoundError(resource_id=phrase_id)

    logger.info("Phrase with ID %d deleted", phrase_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
