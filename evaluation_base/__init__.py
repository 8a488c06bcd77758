"""Evaluation Function Base Layer — command dispatch around one comparison routine.

Invariants:
    - Package root defines only __version__ (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports
"""

__version__ = "1.0.0"
