"""Built-in healthcheck suites — run at request time by the `healthcheck` command.

Invariants:
    - Modules are named *_tests.py so the project's own test collection skips them
    - Suites exercise the deployed code paths, not fixtures or fakes
"""
