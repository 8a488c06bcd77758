"""Envelope Builder — the two output shapes every command resolves to.

Invariants:
    - `command` is always present
    - Exactly one of `result` / `error` is present; no other top-level keys
    - Payloads are passed through untouched (no inspection of result content)
    - Anything returned is strictly JSON-encodable (NaN / Infinity and runaway
      nesting rejected)

Design Decisions:
    - Plain dicts over model instances: the envelope is written straight to the wire
    - Encodability is checked with the same json settings Starlette's JSONResponse
      renders with, so a payload that passes here never fails at render time
"""

import json
from typing import Any, Mapping

from evaluation_base.core.errors import InvalidResult


def build_success(command: str, result: Any) -> dict[str, Any]:
    return {"command": command, "result": result}


def build_failure(command: str, error: Mapping[str, Any]) -> dict[str, Any]:
    return {"command": command, "error": dict(error)}


def ensure_json_encodable(payload: Any) -> None:
    """Raise InvalidResult if payload would not survive JSON rendering."""
    try:
        json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        raise InvalidResult(f"Result is not JSON-encodable: {exc}") from exc
