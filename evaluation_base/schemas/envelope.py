"""Envelope Schemas — pydantic models for the two output variants.

Invariants:
    - SuccessEnvelope has exactly {command, result}
    - FailureEnvelope has exactly {command, error}; error.message is a required str
    - validate_envelope rejects dicts carrying both or neither of result/error

Design Decisions:
    - ErrorBody allows extra fields: structured errors carry author-defined keys
    - Used by the response-shape healthcheck group, not on the hot path
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="allow")

    message: str


class SuccessEnvelope(BaseModel):
    model_config = ConfigDict(extra="forbid")

    command: str
    result: Any


class FailureEnvelope(BaseModel):
    model_config = ConfigDict(extra="forbid")

    command: str
    error: ErrorBody


Envelope = Union[SuccessEnvelope, FailureEnvelope]


def validate_envelope(data: dict[str, Any]) -> Envelope:
    """Parse an output dict into its variant. Raises ValueError on bad shape."""
    has_result = "result" in data
    has_error = "error" in data
    if has_result == has_error:
        raise ValueError("envelope must carry exactly one of 'result' or 'error'")
    if has_result:
        return SuccessEnvelope.model_validate(data)
    return FailureEnvelope.model_validate(data)
