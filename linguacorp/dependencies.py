"""
LinguaCorp API — Route Dependencies
====================================

What:  FastAPI dependencies shared by the phrase routes: settings lookup,
       phrase store lookup and the API key gate.
How:   The application factory stores `settings` and `phrase_service` on
       `app.state`; these dependencies read them back per request, so tests
       can build an app with their own settings and store.

Ordering:
    FastAPI resolves dependencies before it validates path parameters and
    body fields, so require_api_key on the router answers 401 before any
    field-level 400. A body that is not JSON at all fails earlier, while
    FastAPI reads it; main.py's RequestValidationError handler runs
    check_api_key again for those requests so the 401 still wins.
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, Request

from linguacorp.config import Settings
from linguacorp.exceptions import UnauthorizedError
from linguacorp.services.phrase_base import PhraseService

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-KEY"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_phrase_service(request: Request) -> PhraseService:
    return request.app.state.phrase_service


def api_key_matches(provided: Optional[str], expected: str) -> bool:
    """
    Byte-for-byte comparison of the provided key against the configured key.

    A missing header or an unconfigured (empty) server key never matches.
    Starlette decodes header values as latin-1, so encoding back to latin-1
    recovers the bytes the client sent; the configured key is compared as
    UTF-8.
    """
    if not provided or not expected:
        return False
    try:
        raw = provided.encode("latin-1")
    except UnicodeEncodeError:
        # Not a decoded header value; cannot equal any bytes on the wire
        return False
    return secrets.compare_digest(raw, expected.encode("utf-8"))


def check_api_key(request: Request, provided: Optional[str], settings: Settings) -> None:
    """
    Raise UnauthorizedError unless `provided` equals the configured key.

    The key value itself is never logged.
    """
    if not api_key_matches(provided, settings.api_key):
        logger.warning(
            "Rejected %s %s: %s API key",
            request.method,
            request.url.path,
            "missing" if not provided else "invalid",
        )
        raise UnauthorizedError()


async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(default=None, alias=API_KEY_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """Router dependency: 401 unless X-API-KEY equals the configured key."""
    check_api_key(request, x_api_key, settings)
