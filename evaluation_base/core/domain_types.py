"""Domain Types — command selectors and healthcheck group names.

Invariants:
    - Command has exactly four members; the dispatcher maps every one of them
    - Enum values are the literal wire strings

Design Decisions:
    - str-Enum so members compare equal to the raw selector from the request body
"""

from enum import Enum


class Command(str, Enum):
    """Fixed command selectors accepted by the dispatcher."""
    EVAL = "eval"
    HEALTHCHECK = "healthcheck"
    DOCS_USER = "docs-user"
    DOCS_DEV = "docs-dev"


DEFAULT_COMMAND = Command.EVAL


class GroupName(str, Enum):
    """The three independently-run healthcheck groups."""

    REQUEST = "request"
    RESPONSE = "response"
    EVALUATION = "evaluation"
