"""
LinguaCorp API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the JSON contract of the phrase API, plus the
       explicit phrase validation function.
How:   Wire names are camelCase (originalText, translatedText) through an alias
       generator; Python code uses snake_case attribute names.

Design Decision:
    The request model (PhraseCandidate) accepts every field as optional so that
    a missing originalText reaches validate_phrase() and is reported as a 400
    with the documented message, instead of FastAPI's generic 422.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Messages returned for each field rule
ORIGINAL_TEXT_REQUIRED = "OriginalText is required."
LANGUAGE_REQUIRED = "Language is required."
LANGUAGE_INVALID = "Language must be a 2-letter ISO code."

LANGUAGE_CODE_LENGTH = 2


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PhraseCandidate(_CamelModel):
    """
    What:  Body of POST /api/phrases and PUT /api/phrases/{id}.
    Who:   Checked by validate_phrase() before any store call.

    Any `id` sent by the client is ignored; ids are assigned by the store and
    taken from the path on update.
    """
    original_text: Optional[str] = Field(
        default=None,
        description="Text in the source language (required, non-empty)",
    )
    language: Optional[str] = Field(
        default=None,
        description="2-letter ISO language code of originalText (required)",
    )
    translated_text: Optional[str] = Field(
        default=None,
        description="Translation of originalText (optional, may be empty)",
    )


def validate_phrase(candidate: PhraseCandidate) -> Dict[str, List[str]]:
    """
    Check a candidate phrase against the field rules.

    Every field is checked; the result maps the wire name of each violated
    field to its messages. An empty dict means the candidate is valid.

    Rules:
        originalText: present and not blank
        language:     present and not blank, then exactly 2 characters
    """
    errors: Dict[str, List[str]] = {}

    if candidate.original_text is None or not candidate.original_text.strip():
        errors["originalText"] = [ORIGINAL_TEXT_REQUIRED]

    if candidate.language is None or not candidate.language.strip():
        errors["language"] = [LANGUAGE_REQUIRED]
    elif len(candidate.language) != LANGUAGE_CODE_LENGTH:
        errors["language"] = [LANGUAGE_INVALID]

    return errors


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class Phrase(_CamelModel):
    """
    What:  A stored phrase as returned by every store and every endpoint.
    Who:   Returned by GET/POST/PUT on /api/phrases.

    Example:
        {"id": 1, "originalText": "Hello", "language": "EN", "translatedText": ""}
    """
    id: int = Field(description="Server-assigned phrase identifier")
    original_text: str = Field(description="Text in the source language")
    language: str = Field(description="2-letter ISO language code")
    translated_text: str = Field(default="", description="Translation; may be empty")

    @classmethod
    def from_candidate(cls, phrase_id: int, candidate: PhraseCandidate) -> "Phrase":
        """Builds the stored form of a validated candidate under the given id."""
        return cls(
            id=phrase_id,
            original_text=candidate.original_text,
            language=candidate.language,
            translated_text=candidate.translated_text or "",
        )


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every non-2xx response.

    Fields:
        error: Machine-readable code (unauthorized, validation_error, not_found, ...)
        message: Human-readable description
        details: For validation errors, field name → list of messages
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, List[str]]] = Field(
        default=None, description="Per-field validation messages"
    )
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Phrase store status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
