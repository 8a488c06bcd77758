"""Services Layer — command dispatch, guarded invocation, healthcheck, docs.

Invariants:
    - CommandDispatch is the only module aware of all four command handlers
    - Every handler runs inside run_guarded (no failure escapes as an exception)
"""
