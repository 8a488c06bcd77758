"""Healthcheck Orchestrator — runs the three test groups and reduces them to one summary.

Invariants:
    - Each group runs inside its own failure boundary; a raising group is reported as
      failed and the remaining groups still run
    - Every configured group appears in the summary, whatever its outcome
    - summary["tests_passed"] is True only if every group passed
    - Group outcomes live inside the payload; the orchestrator itself never raises
      for a failing test

Design Decisions:
    - Groups are pytest modules run in-process with pytest.main and a collector plugin,
      so authors write evaluation tests the same way the project's own tests are written
    - --capture=sys over fd capture: the server may run other requests in threads and
      fd-level redirection would swallow their output
    - Sequential, not parallel: isolation is required, concurrency is not
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, Sequence

import pytest

from evaluation_base.core.domain_types import GroupName
from evaluation_base.core.errors import render_exception
from evaluation_base.infrastructure.deployment import Deployment
from evaluation_base.infrastructure.observability import log_context

logger = logging.getLogger(__name__)

SUITES_DIR = Path(__file__).resolve().parent.parent / "healthcheck_suites"
REQUEST_SUITE = SUITES_DIR / "request_tests.py"
RESPONSE_SUITE = SUITES_DIR / "response_tests.py"

_BROKEN_EXIT_CODES = frozenset({
    pytest.ExitCode.INTERRUPTED,
    pytest.ExitCode.INTERNAL_ERROR,
    pytest.ExitCode.USAGE_ERROR,
})


@dataclass
class GroupReport:
    """Outcome of one test group."""

    successes: list[str] = field(default_factory=list)
    failures: list[dict[str, str]] = field(default_factory=list)
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successes) + len(self.failures) + len(self.errors)

    @property
    def tests_passed(self) -> bool:
        return not self.failures and not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "tests_passed": self.tests_passed,
            "total": self.total,
            "successes": list(self.successes),
            "failures": list(self.failures),
            "errors": list(self.errors),
        }


class HealthcheckGroup(Protocol):
    """Anything with a name that can run and report itself."""

    name: str

    def run(self) -> GroupReport: ...


class _ReportCollector:
    """pytest plugin: records per-test outcomes into a GroupReport."""

    def __init__(self) -> None:
        self.report = GroupReport()

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        if report.when == "call":
            if report.passed:
                self.report.successes.append(report.nodeid)
            elif report.failed:
                self.report.failures.append(
                    {"name": report.nodeid, "detail": report.longreprtext},
                )
        elif report.failed:
            self.report.errors.append({
                "name": f"{report.nodeid} ({report.when})",
                "detail": report.longreprtext,
            })

    def pytest_collectreport(self, report: pytest.CollectReport) -> None:
        if report.failed:
            self.report.errors.append({
                "name": report.nodeid or "collection",
                "detail": report.longreprtext,
            })


class PytestGroup:
    """A test group backed by a single pytest module."""

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = Path(path)

    def run(self) -> GroupReport:
        if not self.path.is_file():
            return GroupReport(errors=[{
                "name": self.name,
                "detail": f"Test module not found: {self.path}",
            }])
        collector = _ReportCollector()
        exit_code = pytest.main(
            [
                str(self.path), "-q", "--no-header", "--tb=short",
                "--capture=sys", "-p", "no:cacheprovider",
            ],
            plugins=[collector],
        )
        exit_code = pytest.ExitCode(exit_code)
        if exit_code in _BROKEN_EXIT_CODES:
            logger.error(
                f"Test group '{self.name}' did not complete",
                extra=log_context(group=self.name, exit_code=exit_code.name),
            )
            collector.report.errors.append({
                "name": self.name,
                "detail": f"pytest exited with {exit_code.name}",
            })
        return collector.report


def default_groups(deployment: Deployment) -> list[PytestGroup]:
    return [
        PytestGroup(GroupName.REQUEST.value, REQUEST_SUITE),
        PytestGroup(GroupName.RESPONSE.value, RESPONSE_SUITE),
        PytestGroup(
            GroupName.EVALUATION.value, deployment.evaluation_tests_path,
        ),
    ]


def run_healthcheck(groups: Sequence[HealthcheckGroup]) -> dict[str, Any]:
    """Run every group in isolation and combine the results."""
    reports = {group.name: _run_isolated(group) for group in groups}
    return {
        "tests_passed": all(r.tests_passed for r in reports.values()),
        "groups": {name: r.to_dict() for name, r in reports.items()},
    }


def _run_isolated(group: HealthcheckGroup) -> GroupReport:
    try:
        return group.run()
    except Exception as exc:
        logger.error(
            f"Test group '{group.name}' raised {type(exc).__name__}",
            exc_info=True, extra=log_context(group=group.name),
        )
        return GroupReport(errors=[{
            "name": group.name,
            "detail": render_exception(exc),
        }])
