"""
LinguaCorp API — Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    1. Request ID: accept or generate a correlation id
    2. Access Log: log method, path, status and duration with that id

API key checks are NOT middleware: they run as a route dependency so that
they happen before body validation but after routing.
"""
