"""Response Shape Suite — checks that every envelope variant is well-formed."""

import pytest

from evaluation_base.core.errors import EvaluationException, UNSTRUCTURED_MESSAGE
from evaluation_base.schemas.envelope import (
    FailureEnvelope, SuccessEnvelope, validate_envelope,
)
from evaluation_base.services.invocation import run_guarded


def _raise(exc):
    raise exc


def test_success_envelope_shape():
    envelope = run_guarded("eval", lambda: {"is_correct": True})
    assert isinstance(validate_envelope(envelope), SuccessEnvelope)
    assert set(envelope) == {"command", "result"}


def test_result_containing_error_key_stays_success():
    envelope = run_guarded("eval", lambda: {"is_correct": False, "error": "x"})
    assert isinstance(validate_envelope(envelope), SuccessEnvelope)


def test_structured_error_envelope_shape():
    envelope = run_guarded(
        "eval", lambda: _raise(EvaluationException("bad input", culprit="response")),
    )
    parsed = validate_envelope(envelope)
    assert isinstance(parsed, FailureEnvelope)
    assert envelope["error"] == {"message": "bad input", "culprit": "response"}


def test_unstructured_error_envelope_shape():
    envelope = run_guarded("eval", lambda: _raise(ZeroDivisionError("division by zero")))
    assert isinstance(validate_envelope(envelope), FailureEnvelope)
    assert envelope["error"]["message"] == UNSTRUCTURED_MESSAGE
    assert isinstance(envelope["error"]["detail"], str)


def test_envelope_with_both_variants_is_rejected():
    with pytest.raises(ValueError):
        validate_envelope({"command": "eval", "result": {}, "error": {"message": "x"}})


def test_envelope_with_neither_variant_is_rejected():
    with pytest.raises(ValueError):
        validate_envelope({"command": "eval"})


def test_error_without_message_is_rejected():
    with pytest.raises(ValueError):
        validate_envelope({"command": "eval", "error": {"detail": "x"}})
