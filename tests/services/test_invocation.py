"""Invocation Boundary — tests for run_guarded and invoke_evaluation.

Tests cover:
    - Returned mappings become the result verbatim, even with an "error" key
    - EvaluationException fields surface verbatim
    - Any other exception collapses to {message, detail}
    - Non-mapping and non-encodable results are unstructured failures
    - Structured errors with non-encodable or runaway-nested fields degrade to unstructured
    - Exceptions whose __str__ raises still produce an envelope
    - The routine is called exactly once (no retries)
"""

import logging

from evaluation_base.core.errors import EvaluationException, UNSTRUCTURED_MESSAGE
from evaluation_base.services.invocation import invoke_evaluation, run_guarded


def _guarded_eval(func, response="r", answer="a", params=None):
    return run_guarded(
        "eval", lambda: invoke_evaluation(func, response, answer, params or {}),
    )


def test_success_result_is_returned_verbatim():
    envelope = _guarded_eval(lambda r, a, p: {"is_correct": True, "feedback": "ok"})
    assert envelope == {"command": "eval", "result": {"is_correct": True, "feedback": "ok"}}


def test_error_key_in_result_is_not_a_failure():
    envelope = _guarded_eval(lambda r, a, p: {"is_correct": True, "error": "ignored"})
    assert envelope == {
        "command": "eval", "result": {"is_correct": True, "error": "ignored"},
    }


def test_structured_error_fields_surface_verbatim():
    def func(r, a, p):
        raise EvaluationException("Some important message", other="details")

    assert _guarded_eval(func) == {
        "command": "eval",
        "error": {"message": "Some important message", "other": "details"},
    }


def test_unstructured_error_is_collapsed():
    def func(r, a, p):
        return {"is_correct": 1 / 0}

    envelope = _guarded_eval(func)
    assert "result" not in envelope
    assert envelope["error"] == {
        "message": UNSTRUCTURED_MESSAGE, "detail": "division by zero",
    }


def test_assertion_error_detail():
    def func(r, a, p):
        assert r == a, "response differs"

    assert _guarded_eval(func)["error"]["detail"].startswith("response differs")


def test_non_mapping_result_is_unstructured_failure():
    envelope = _guarded_eval(lambda r, a, p: True)
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE
    assert "got bool" in envelope["error"]["detail"]


def test_non_encodable_result_is_unstructured_failure():
    envelope = _guarded_eval(lambda r, a, p: {"is_correct": True, "when": object()})
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE
    assert "result" not in envelope


def test_nan_result_is_unstructured_failure():
    envelope = _guarded_eval(lambda r, a, p: {"is_correct": True, "score": float("nan")})
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE


def test_structured_error_with_unencodable_field_degrades():
    def func(r, a, p):
        raise EvaluationException("bad", culprit=object())

    envelope = _guarded_eval(func)
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE


def test_arguments_passed_in_order():
    seen = []

    def func(r, a, p):
        seen.append((r, a, p))
        return {"is_correct": False}

    _guarded_eval(func, response=1, answer=2, params={"k": "v"})
    assert seen == [(1, 2, {"k": "v"})]


def test_failing_routine_called_once():
    calls = []

    def func(r, a, p):
        calls.append(1)
        raise RuntimeError("flaky")

    _guarded_eval(func)
    assert len(calls) == 1


def test_unstructured_failure_logged_with_traceback(caplog):
    def func(r, a, p):
        raise KeyError("missing")

    with caplog.at_level(logging.ERROR, logger="evaluation_base.services.invocation"):
        _guarded_eval(func)
    record = caplog.records[-1]
    assert record.error_kind == "unstructured"
    assert record.exc_info is not None


def test_identical_calls_give_identical_envelopes():
    def func(r, a, p):
        return {"is_correct": r == a, "params": p}

    params = {"submission_context": {"submissions_per_student_per_response_area": 2}}
    assert _guarded_eval(func, 1, 1, params) == _guarded_eval(func, 1, 1, params)


class _UnprintableError(Exception):
    def __str__(self):
        raise RuntimeError("cannot render")

    def __repr__(self):
        raise RuntimeError("cannot render")


def _nested_list(depth):
    value = []
    for _ in range(depth):
        value = [value]
    return value


def test_exception_with_raising_str_still_enveloped():
    def func(r, a, p):
        raise _UnprintableError()

    assert _guarded_eval(func) == {
        "command": "eval",
        "error": {"message": UNSTRUCTURED_MESSAGE, "detail": "_UnprintableError"},
    }


def test_exception_with_raising_str_is_logged(caplog):
    def func(r, a, p):
        raise _UnprintableError()

    with caplog.at_level(logging.ERROR, logger="evaluation_base.services.invocation"):
        _guarded_eval(func)
    assert "_UnprintableError" in caplog.records[-1].getMessage()


def test_deeply_nested_result_is_unstructured_failure():
    envelope = _guarded_eval(lambda r, a, p: {"tree": _nested_list(100_000)})
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE


def test_structured_error_with_deeply_nested_field_degrades():
    def func(r, a, p):
        raise EvaluationException("too deep", tree=_nested_list(100_000))

    envelope = _guarded_eval(func)
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE
    assert "tree" not in envelope["error"]


def test_structured_error_whose_to_dict_raises_degrades():
    class BrokenError(EvaluationException):
        def to_dict(self):
            raise _UnprintableError()

    def func(r, a, p):
        raise BrokenError("broken")

    assert _guarded_eval(func)["error"] == {
        "message": UNSTRUCTURED_MESSAGE, "detail": "_UnprintableError",
    }
