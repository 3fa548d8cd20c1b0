"""API Layer — FastAPI routes, envelope helpers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is an envelope: {status, error?, data?}

Design Decisions:
    - Thin routes: decode, validate, delegate to QnaService, wrap the result
"""
