"""Core Layer — pure envelope and error logic, no IO, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from the imperative shell (services/, api/)
"""
