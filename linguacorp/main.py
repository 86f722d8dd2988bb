"""
LinguaCorp API — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings, phrase_service) wires configuration, the phrase
       store, middleware, exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn linguacorp.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐ │
    │  │  Request ID  │→│  Access Log  │→│    CORS     │ │
    │  └──────────────┘ └──────────────┘ └─────────────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌─────────────────────────┐ ┌──────────────────┐  │
    │  │ /api/phrases (API key)  │ │ GET /health      │  │
    │  └─────────────────────────┘ └──────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ 401 Unauthorized │ 400 Validation │ 404 │ 500│  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log the store in use
    Shutdown: close the phrase store, dispose the database engine if any
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from linguacorp import __version__
from linguacorp.config import Settings
from linguacorp.database import (
    create_engine_from_settings,
    create_session_factory,
    dispose_engine,
)
from linguacorp.dependencies import API_KEY_HEADER, check_api_key
from linguacorp.exceptions import (
    NotFoundError,
    PhraseServiceError,
    UnauthorizedError,
    ValidationError,
)
from linguacorp.middleware.logging import RequestLoggingMiddleware
from linguacorp.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from linguacorp.routes import health, phrases
from linguacorp.services import PhraseService, build_phrase_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (collected by Docker / systemd)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings)
    logger.info("=" * 60)
    logger.info("LinguaCorp API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: /health stays up and phrase routes answer 401
        logger.error("Configuration error: %s", str(e))

    logger.info("Phrase store: %s", type(app.state.phrase_service).__name__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("LinguaCorp API shutting down...")
    await app.state.phrase_service.close()
    if app.state.engine is not None:
        await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(
    error: str,
    message: str,
    details: Optional[Dict[str, List[str]]] = None,
) -> Dict[str, Any]:
    return {
        "error": error,
        "message": message,
        "details": details,
        "request_id": request_id_var.get(""),
    }


def _request_errors_to_fields(errors: Sequence[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Collapse FastAPI/Pydantic parse errors into field name → messages.

    ("body", "originalText") → "originalText"; a body-level error such as
    invalid JSON is reported under "body".
    """
    fields: Dict[str, List[str]] = {}
    for error in errors:
        loc = [part for part in error.get("loc", ()) if isinstance(part, str)]
        field = loc[-1] if len(loc) > 1 else (loc[0] if loc else "body")
        fields.setdefault(field, []).append(error.get("msg", "Invalid value."))
    return fields


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP status codes and error bodies.

    Handler hierarchy:
        UnauthorizedError       → 401
        ValidationError         → 400 (per-field details)
        RequestValidationError  → 400 (framework parse errors), 401 on a bad key
        NotFoundError           → 404
        PhraseServiceError      → 500 (fixed message, context logged)
        Exception (fallback)    → 500 (traceback logged)

    Responses never include stack traces or exception text from the store.
    """

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content=_error_body("unauthorized", exc.message),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s %s", rid, exc.message, exc.errors or "")
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.errors or None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """
        Malformed JSON, wrong field types or a non-integer path id.

        Reported as 400 like every other shape failure; a bad path id gets
        the same message as a non-positive one.

        An unparseable body is rejected before router dependencies run, so
        the API key is checked here first for phrase routes.
        """
        if request.url.path.startswith(phrases.router.prefix):
            try:
                check_api_key(
                    request,
                    request.headers.get(API_KEY_HEADER),
                    request.app.state.settings,
                )
            except UnauthorizedError as auth_exc:
                return await handle_unauthorized(request, auth_exc)

        if any(error.get("loc", ("",))[0] == "path" for error in exc.errors()):
            return JSONResponse(
                status_code=400,
                content=_error_body("validation_error", phrases.INVALID_ID_MESSAGE),
            )
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                "One or more validation errors occurred.",
                _request_errors_to_fields(exc.errors()),
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(PhraseServiceError)
    async def handle_phrase_service_error(request: Request, exc: PhraseServiceError):
        rid = request_id_var.get("")
        logger.error("[%s] Phrase store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Served by ServerErrorMiddleware, outside RequestIDMiddleware
        rid = request_id_var.get("") or getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        body = _error_body(
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )
        body["request_id"] = rid
        return JSONResponse(
            status_code=500,
            content=body,
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    phrase_service: Optional[PhraseService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        phrase_service: Store to serve phrases from; built from
            settings.phrase_store when omitted.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or Settings()

    engine = None
    if phrase_service is None:
        session_factory = None
        if settings.uses_database:
            engine = create_engine_from_settings(settings)
            session_factory = create_session_factory(engine)
        phrase_service = build_phrase_service(settings, session_factory)

    app = FastAPI(
        title="LinguaCorp API",
        description="Stores phrases with their language code and translation.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.phrase_service = phrase_service
    app.state.engine = engine

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(phrases.router)
    app.include_router(health.router)

    return app


app = create_app()
