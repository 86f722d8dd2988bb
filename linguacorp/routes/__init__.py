"""
LinguaCorp API — API Routes Package
====================================

Route Inventory:
    - phrases.py: /api/phrases CRUD (API key required)
    - health.py:  GET /health (public)

Routes stay thin: check input, call the PhraseService, pick the status code.
Storage details live in linguacorp.services.
"""
