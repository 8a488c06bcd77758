"""Submission Context — attaches prior-submission metadata to evaluation params.

Invariants:
    - The caller's params mapping is never mutated (deep copy first)
    - Existing keys, including other keys inside `submission_context`, are preserved
    - `submissions_per_student_per_response_area` is owned here and always overwritten
"""

import copy
from typing import Any, Mapping

SUBMISSION_CONTEXT_KEY = "submission_context"
SUBMISSION_COUNT_KEY = "submissions_per_student_per_response_area"


def with_submission_context(
    params: Mapping[str, Any] | None, submission_count: int,
) -> dict[str, Any]:
    """Return a copy of params with submission_context filled in."""
    if submission_count < 0:
        raise ValueError("submission_count must be non-negative")
    augmented = copy.deepcopy(dict(params or {}))
    existing = augmented.get(SUBMISSION_CONTEXT_KEY)
    context = dict(existing) if isinstance(existing, Mapping) else {}
    context[SUBMISSION_COUNT_KEY] = submission_count
    augmented[SUBMISSION_CONTEXT_KEY] = context
    return augmented
