"""Command Dispatch — explicit routing from command selector to handler.

Invariants:
    - Every command->handler mapping is visible in one dict; no getattr magic
    - Selector resolution: body["command"], then the `command` header, then "eval"
    - Unknown selectors produce an UnknownCommand error envelope (never raises)
    - Every handler, request parsing included, runs inside run_guarded
    - The caller's body and params are never mutated

Design Decisions:
    - Deployment injected at construction: exactly one evaluation function, two doc
      artifacts and one evaluation test module per instance
    - Healthcheck groups injectable for tests; default groups derived from the deployment
"""

import logging
from typing import Any, Callable, Mapping, Sequence

from evaluation_base.core.domain_types import Command, DEFAULT_COMMAND
from evaluation_base.core.errors import UnknownCommand
from evaluation_base.core.submission_context import with_submission_context
from evaluation_base.infrastructure.deployment import Deployment
from evaluation_base.infrastructure.observability import log_context
from evaluation_base.schemas.request import EvaluationRequest, parse_request
from evaluation_base.services.docs import read_encoded
from evaluation_base.services.healthcheck import (
    HealthcheckGroup, default_groups, run_healthcheck,
)
from evaluation_base.services.invocation import invoke_evaluation, run_guarded

logger = logging.getLogger(__name__)

Handler = Callable[[EvaluationRequest], Any]


def resolve_command(body: Any, header_command: str | None = None) -> str:
    selector = body.get("command") if isinstance(body, Mapping) else None
    if selector is None:
        selector = header_command
    if selector is None:
        return DEFAULT_COMMAND.value
    return selector if isinstance(selector, str) else str(selector)


class CommandDispatch:
    """Routes command -> handler. Explicit registration, no auto-discovery."""

    def __init__(
        self,
        deployment: Deployment,
        healthcheck_groups: Sequence[HealthcheckGroup] | None = None,
    ):
        self._deployment = deployment
        self._healthcheck_groups = (
            list(healthcheck_groups) if healthcheck_groups is not None
            else default_groups(deployment)
        )

        self._handlers: dict[str, Handler] = {
            Command.EVAL.value: self._evaluate,
            Command.HEALTHCHECK.value: self._healthcheck,
            Command.DOCS_USER.value: self._docs_user,
            Command.DOCS_DEV.value: self._docs_dev,
        }

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    def execute(
        self, body: Any, header_command: str | None = None,
    ) -> dict[str, Any]:
        """Resolve the selector and return exactly one envelope."""
        command = resolve_command(body, header_command)
        handler = self._handlers.get(command)
        if handler is None:
            return run_guarded(command, _raiser(UnknownCommand(command)))
        logger.debug(f"Dispatching '{command}'", extra=log_context(command=command))
        return run_guarded(
            command, lambda: handler(parse_request(body, command)),
        )

    def _evaluate(self, request: EvaluationRequest) -> dict[str, Any]:
        params = with_submission_context(
            request.params, request.submissions_per_student_per_response_area,
        )
        return invoke_evaluation(
            self._deployment.evaluation_function,
            request.response, request.answer, params,
        )

    def _healthcheck(self, request: EvaluationRequest) -> dict[str, Any]:
        return run_healthcheck(self._healthcheck_groups)

    def _docs_user(self, request: EvaluationRequest) -> str:
        return read_encoded(self._deployment.docs_user_path)

    def _docs_dev(self, request: EvaluationRequest) -> str:
        return read_encoded(self._deployment.docs_dev_path)


def _raiser(exc: Exception) -> Callable[[], Any]:
    def _raise() -> Any:
        raise exc
    return _raise
