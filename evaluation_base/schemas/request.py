"""Request Schema — shape validation for inbound evaluation requests.

Invariants:
    - An absent (null) body is treated as {}; params null is treated as {}
    - submissions_per_student_per_response_area is a non-negative int (strict, no bool/str coercion)
    - `eval` requires both `response` and `answer` to be present (explicit null counts)
    - Validation failures surface as InvalidRequest, never as pydantic.ValidationError

Design Decisions:
    - response/answer typed Any: their shape belongs to the evaluation function
    - Unknown top-level keys ignored: callers may send routing metadata we don't own
    - Field-level details use the same {field, message, type} shape as the HTTP
      validation handler so clients see one format
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from evaluation_base.core.domain_types import Command, DEFAULT_COMMAND
from evaluation_base.core.errors import InvalidRequest


class EvaluationRequest(BaseModel):
    """Inbound request — one per invocation."""

    model_config = ConfigDict(extra="ignore")

    command: str = DEFAULT_COMMAND.value
    response: Any = None
    answer: Any = None
    params: dict[str, Any] = Field(default_factory=dict)
    submissions_per_student_per_response_area: int = Field(
        0, ge=0, strict=True,
    )

    @field_validator("params", mode="before")
    @classmethod
    def null_params_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


def format_validation_errors(errors: list[dict]) -> list[dict[str, str]]:
    """Reduce pydantic error dicts to JSON-safe {field, message, type}."""
    return [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]


def parse_request(body: Any, command: str) -> EvaluationRequest:
    """Validate a raw body for the given resolved command. An absent body is {}."""
    if body is None:
        body = {}
    if not isinstance(body, Mapping):
        raise InvalidRequest([{
            "field": "",
            "message": "Request body must be a JSON object",
            "type": "dict_type",
        }])
    try:
        request = EvaluationRequest.model_validate(dict(body))
    except ValidationError as exc:
        raise InvalidRequest(format_validation_errors(exc.errors())) from exc

    if command == Command.EVAL:
        missing = [
            name for name in ("response", "answer")
            if name not in request.model_fields_set
        ]
        if missing:
            raise InvalidRequest([
                {"field": name, "message": "Field required", "type": "missing"}
                for name in missing
            ])
    return request
