"""Error Model — the structured error raised by evaluation functions, plus core failures.

Invariants:
    - EvaluationException carries a mandatory message and any number of extra named fields
    - Fields are read-only after construction; to_dict() returns a fresh copy every call
    - to_dict() is the exact `error` object placed in the output envelope
    - Anything that is not an EvaluationException is unstructured: only its string form survives

Design Decisions:
    - One distinguished exception with an open mapping over a hierarchy of typed subclasses:
      authors raise with arbitrary keyword fields (ADR: structured errors are an author API)
    - Core failures (routing, request shape) subclass EvaluationException so they travel
      through the same boundary as author errors
    - InvalidResult is deliberately NOT structured: a bad return value is a broken
      evaluation function, not a designed outcome
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


UNSTRUCTURED_MESSAGE = (
    "An exception was raised while executing the evaluation function."
)


class ErrorKind(str, Enum):
    """Failure classification, surfaced in logs (never in the envelope)."""
    STRUCTURED = "structured"
    UNSTRUCTURED = "unstructured"
    ROUTING = "routing"
    REQUEST = "request"


class EvaluationException(Exception):
    """Controlled failure raised by an evaluation function.

    Every keyword argument is propagated verbatim into the response's
    ``error`` object alongside ``message``::

        raise EvaluationException(
            "Could not parse response", culprit="response", detail=str(exc),
        )
    """

    kind = ErrorKind.STRUCTURED

    def __init__(self, message: str, **fields: Any):
        super().__init__(message)
        self._message = str(message)
        self._fields = MappingProxyType(dict(fields))

    @property
    def message(self) -> str:
        return self._message

    @property
    def fields(self) -> Mapping[str, Any]:
        return self._fields

    def to_dict(self) -> dict[str, Any]:
        return {"message": self._message, **self._fields}

    def __repr__(self) -> str:
        extra = "".join(f", {k}={v!r}" for k, v in self._fields.items())
        return f"{type(self).__name__}({self._message!r}{extra})"


class UnknownCommand(EvaluationException):
    """Selector does not name one of the fixed commands."""

    kind = ErrorKind.ROUTING

    def __init__(self, command: str):
        super().__init__(f"Unknown command '{command}'.", command=command)


class InvalidRequest(EvaluationException):
    """Request body does not match the expected shape."""

    kind = ErrorKind.REQUEST

    def __init__(self, details: list[dict[str, Any]]):
        super().__init__("Schema validation error", detail=details)


class InvalidResult(Exception):
    """Evaluation function returned something that cannot be a result payload."""


def render_exception(exc: BaseException) -> str:
    """str(exc), or the class name when that is empty or str() itself raises."""
    try:
        text = str(exc)
    except Exception:
        text = ""
    return text or type(exc).__name__


def unstructured_error(exc: BaseException) -> dict[str, str]:
    """Collapse an arbitrary exception to the fixed {message, detail} shape."""
    return {
        "message": UNSTRUCTURED_MESSAGE,
        "detail": render_exception(exc),
    }
