"""Evaluation Function — compares a response to an answer.

Numbers are compared with optional absolute/relative tolerance; everything else is
compared as normalized text. A list answer means "any of these is accepted".

Params:
    atol, rtol (float >= 0): numeric tolerances, default 0
    case_sensitive (bool): text comparison, default False
    reveal_answer_after (int >= 0): after this many previous submissions an incorrect
        response gets the answer in its feedback
"""

import math
from typing import Any

from evaluation_base.core.errors import EvaluationException
from evaluation_base.core.submission_context import (
    SUBMISSION_CONTEXT_KEY, SUBMISSION_COUNT_KEY,
)


def evaluation_function(response: Any, answer: Any, params: dict) -> dict:
    atol = _tolerance(params, "atol")
    rtol = _tolerance(params, "rtol")
    case_sensitive = bool(params.get("case_sensitive", False))
    reveal = _should_reveal(params)

    accepted = answer if isinstance(answer, list) else [answer]
    if not accepted:
        raise EvaluationException(
            "No accepted answers configured", culprit="answer",
        )

    is_correct = any(
        _matches(response, candidate, atol, rtol, case_sensitive)
        for candidate in accepted
    )
    result: dict[str, Any] = {"is_correct": is_correct}
    if is_correct:
        result["feedback"] = "Correct."
    elif reveal:
        result["feedback"] = f"Incorrect. The expected answer is {accepted[0]}."
    else:
        result["feedback"] = "Incorrect."
    return result


def _tolerance(params: dict, name: str) -> float:
    value = params.get(name, 0.0)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise EvaluationException(
            f"Parameter '{name}' must be a non-negative number",
            culprit=name, value=repr(value),
        )
    return float(value)


def _should_reveal(params: dict) -> bool:
    threshold = params.get("reveal_answer_after")
    if threshold is None:
        return False
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 0:
        raise EvaluationException(
            "Parameter 'reveal_answer_after' must be a non-negative integer",
            culprit="reveal_answer_after", value=repr(threshold),
        )
    context = params.get(SUBMISSION_CONTEXT_KEY, {})
    return context.get(SUBMISSION_COUNT_KEY, 0) >= threshold


def _matches(
    response: Any, answer: Any, atol: float, rtol: float, case_sensitive: bool,
) -> bool:
    if _is_number(answer):
        value = _as_number(response)
        if value is None:
            return False
        return math.isclose(value, float(answer), rel_tol=rtol, abs_tol=atol)
    return _normalize(response, case_sensitive) == _normalize(answer, case_sensitive)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_number(value: Any) -> float | None:
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _normalize(value: Any, case_sensitive: bool) -> str:
    text = " ".join(str(value).split())
    return text if case_sensitive else text.casefold()
