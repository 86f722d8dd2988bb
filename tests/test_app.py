"""
LinguaCorp API — Application, Health & Configuration Tests
===========================================================

What:  Tests for the app factory wiring, the lifespan, GET /health and Settings.

What we test:
    ✅ /health is public and reflects the store's health check
    ✅ The factory builds the store from settings when none is given
    ✅ Shutdown closes the store
    ✅ Settings validation (store name, log level, missing API key)
    ✅ API key comparison on the bytes the client sent
    ✅ Request ids: client tokens kept, unsafe ones replaced, present on 500s
    ✅ Access log: one line per request, never the key
"""

import logging
from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError as PydanticValidationError

from linguacorp import __version__
from linguacorp.config import Settings
from linguacorp.dependencies import api_key_matches
from linguacorp.main import create_app
from linguacorp.middleware.request_id import resolve_request_id
from linguacorp.services.memory_store import InMemoryPhraseService


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_needs_no_api_key(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["store"] == "available"
        assert body["version"] == __version__

    @pytest.mark.asyncio
    async def test_unhealthy_store_returns_503(self, mock_client, mock_phrase_service):
        mock_phrase_service.health_check.return_value = False

        response = await mock_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["store"] == "unavailable"


class TestAppFactory:

    def test_builds_memory_store_from_settings(self):
        app = create_app(settings=Settings(api_key="k", phrase_store="memory"))

        assert isinstance(app.state.phrase_service, InMemoryPhraseService)
        assert app.state.engine is None

    @pytest.mark.asyncio
    async def test_settings_key_is_used_per_app(self, memory_store):
        """Two apps with different keys do not share configuration."""
        app_a = create_app(settings=Settings(api_key="key-a"), phrase_service=memory_store)
        app_b = create_app(settings=Settings(api_key="key-b"), phrase_service=memory_store)

        async with AsyncClient(transport=ASGITransport(app=app_a), base_url="http://test") as a, \
                AsyncClient(transport=ASGITransport(app=app_b), base_url="http://test") as b:
            assert (await a.get("/api/phrases", headers={"X-API-KEY": "key-a"})).status_code == 204
            assert (await b.get("/api/phrases", headers={"X-API-KEY": "key-a"})).status_code == 401

    @pytest.mark.asyncio
    async def test_lifespan_closes_store(self, test_settings, mock_phrase_service):
        app = create_app(settings=test_settings, phrase_service=mock_phrase_service)

        with patch("linguacorp.main.setup_logging"):
            async with app.router.lifespan_context(app):
                mock_phrase_service.close.assert_not_awaited()

        mock_phrase_service.close.assert_awaited_once()


class TestSettings:

    def test_defaults(self):
        settings = Settings(api_key="k", phrase_store="memory", log_level="info")

        assert settings.log_level == "INFO"
        assert settings.uses_database is False

    def test_store_name_is_case_insensitive(self):
        assert Settings(phrase_store="DATABASE").uses_database is True

    def test_unknown_store_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(phrase_store="redis")

    def test_unknown_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_missing_api_key_fails_production_check(self):
        with pytest.raises(ValueError, match="API_KEY"):
            Settings(api_key="").validate_required_for_production()

    def test_configured_key_passes_production_check(self):
        Settings(api_key="secret", phrase_store="memory").validate_required_for_production()


class TestApiKeyMatches:
    """Header values arrive decoded as latin-1; the configured key is text."""

    def test_exact_ascii_key(self):
        assert api_key_matches("secret", "secret") is True
        assert api_key_matches("Secret", "secret") is False

    def test_non_ascii_key_compared_on_wire_bytes(self):
        key = "clé-ключ"
        as_received = key.encode("utf-8").decode("latin-1")

        assert api_key_matches(as_received, key) is True
        assert api_key_matches(key, key) is False

    @pytest.mark.parametrize("provided,expected", [(None, "k"), ("", "k"), ("k", ""), ("", "")])
    def test_empty_values_never_match(self, provided, expected):
        assert api_key_matches(provided, expected) is False


class TestRequestId:

    def test_client_token_is_kept(self):
        assert resolve_request_id("trace-123.a_b") == "trace-123.a_b"

    @pytest.mark.parametrize("value", [None, "", "has space", "line\nbreak", "x" * 65])
    def test_unsafe_or_missing_value_is_replaced(self, value):
        rid = resolve_request_id(value)

        assert rid != value
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_unexpected_error_still_carries_request_id(self, test_settings, mock_phrase_service):
        mock_phrase_service.health_check.side_effect = RuntimeError("socket closed")
        app = create_app(settings=test_settings, phrase_service=mock_phrase_service)
        transport = ASGITransport(app=app, raise_app_exceptions=False)

        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-500"
        assert response.json()["request_id"] == "trace-500"
        assert response.json()["error"] == "internal_server_error"
        assert "socket closed" not in response.text


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_one_line_per_request_without_key(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="linguacorp.access"):
            await test_client.get(
                "/api/phrases",
                headers={"X-API-KEY": "wrong-key-value", "X-Request-ID": "trace-log"},
            )

        records = [r for r in caplog.records if r.name == "linguacorp.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "GET /api/phrases 401" in records[0].getMessage()
        assert "[trace-log]" in records[0].getMessage()
        assert "wrong-key-value" not in caplog.text

    @pytest.mark.asyncio
    async def test_health_is_not_logged(self, test_client, caplog):
        with caplog.at_level(logging.INFO, logger="linguacorp.access"):
            await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "linguacorp.access"]
