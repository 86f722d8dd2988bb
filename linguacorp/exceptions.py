"""
LinguaCorp API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for each failure class of the phrase API.
How:   Each exception carries a client-safe message and an optional context dict.
       Global handlers (registered in main.py) turn them into JSON error bodies.
Who:   Raised by the API key dependency and the phrase route handlers.

Exception Hierarchy:
    LinguaCorpError (base)
    ├── UnauthorizedError    → 401 Unauthorized
    ├── ValidationError      → 400 Bad Request (per-field messages)
    ├── NotFoundError        → 404 Not Found
    └── PhraseServiceError   → 500 Internal Server Error (fixed message)
"""

from typing import Any, Dict, List, Optional


class LinguaCorpError(Exception):
    """
    Base exception for all LinguaCorp application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class UnauthorizedError(LinguaCorpError):
    """
    Raised when the X-API-KEY header is missing or does not match.

    HTTP:  401 Unauthorized

    The message is identical for a missing and a wrong key so callers cannot
    probe which case they hit.
    """

    def __init__(
        self,
        message: str = "Invalid or missing API key.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(LinguaCorpError):
    """
    Raised when client input fails shape validation.

    What:    Non-positive id, or a phrase body with missing/invalid fields.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "One or more validation errors occurred.",
            "details": {
                "originalText": ["OriginalText is required."],
                "language": ["Language must be a 2-letter ISO code."]
            }
        }
    """

    def __init__(
        self,
        message: str = "One or more validation errors occurred.",
        errors: Optional[Dict[str, List[str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = errors or {}


class NotFoundError(LinguaCorpError):
    """
    Raised when a requested phrase does not exist.

    HTTP:    404 Not Found

    The stores report a missing phrase as None/False; route handlers convert
    that result into this exception.
    """

    def __init__(
        self,
        resource: str = "Phrase",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource.lower()} was not found."
        if resource_id is not None:
            message = f"{resource} with ID {resource_id} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class PhraseServiceError(LinguaCorpError):
    """
    Raised when the phrase store fails unexpectedly.

    What:    Any exception from the store other than a not-found result.
    HTTP:    500 Internal Server Error

    Security Note:
        The message is a fixed sentence chosen by the route handler. The
        original exception is logged server-side with its traceback and only
        its type name is kept in the context.
    """

    def __init__(
        self,
        message: str = "An internal error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
