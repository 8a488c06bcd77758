"""Invocation Boundary — runs a handler and classifies whatever escapes it.

Invariants:
    - Every call returns exactly one envelope variant; nothing is re-raised
    - Return values are never inspected for error-like keys: a result containing
      "error" is still a success
    - EvaluationException → error is exactly exc.to_dict()
    - Any other Exception → {message: UNSTRUCTURED_MESSAGE, detail: render_exception(exc)}
    - Rendering a failure never raises, even when the exception's __str__ does
    - No retries: a failing evaluation is reported on the first attempt

Design Decisions:
    - Success payloads are checked for JSON encodability inside the boundary, so a
      non-serializable result becomes an unstructured failure instead of a 500
    - Structured errors that cannot be rendered (non-serializable or runaway-nested
      fields, a to_dict that raises) degrade to unstructured for the
      same reason
    - Catches Exception, not BaseException: shutdown signals are the host's business
"""

import logging
from typing import Any, Callable, Mapping

from evaluation_base.core.envelope import (
    build_failure, build_success, ensure_json_encodable,
)
from evaluation_base.core.errors import (
    ErrorKind, EvaluationException, InvalidResult, unstructured_error,
)
from evaluation_base.infrastructure.deployment import EvaluationFunction
from evaluation_base.infrastructure.observability import log_context

logger = logging.getLogger(__name__)


def run_guarded(command: str, call: Callable[[], Any]) -> dict[str, Any]:
    """Run call() and wrap its outcome in an envelope for command."""
    try:
        payload = call()
        ensure_json_encodable(payload)
    except EvaluationException as exc:
        return _structured_failure(command, exc)
    except Exception as exc:
        return _unstructured_failure(command, exc)
    return build_success(command, payload)


def invoke_evaluation(
    func: EvaluationFunction, response: Any, answer: Any, params: dict,
) -> dict[str, Any]:
    """Call the evaluation function once; enforce the mapping return contract."""
    result = func(response, answer, params)
    if not isinstance(result, Mapping):
        raise InvalidResult(
            f"Evaluation function must return a mapping, got {type(result).__name__}",
        )
    return dict(result)


def _structured_failure(
    command: str, exc: EvaluationException,
) -> dict[str, Any]:
    try:
        error = exc.to_dict()
        ensure_json_encodable(error)
        level = logging.INFO if exc.kind == ErrorKind.STRUCTURED else logging.WARNING
        message = f"{type(exc).__name__}: {exc.message}"
        kind = exc.kind.value
    except Exception as render_exc:
        return _unstructured_failure(command, render_exc)
    logger.log(level, message, extra=log_context(command=command, error_kind=kind))
    return build_failure(command, error)


def _unstructured_failure(command: str, exc: Exception) -> dict[str, Any]:
    logger.error(
        f"Unstructured failure during '{command}': {type(exc).__name__}",
        exc_info=exc,
        extra=log_context(
            command=command, error_kind=ErrorKind.UNSTRUCTURED.value,
        ),
    )
    return build_failure(command, unstructured_error(exc))
