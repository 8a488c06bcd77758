"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every response body is an envelope: {command, result} or {command, error}

Design Decisions:
    - Thin routes delegate to CommandDispatch
"""
