"""Root conftest — shared deployment fixtures.

Invariants:
    - Every test gets its own doc artifacts under tmp_path
    - make_deployment never imports the bundled example unless asked to
"""

import os

import pytest

from evaluation_base.infrastructure.deployment import Deployment

os.environ.setdefault("LOG_FORMAT", "text")

USER_DOC = "# User guide\n\nCompare answers — ünïcode included.\n".encode("utf-8")
DEV_DOC = b"# Developer guide\n\nParams: none.\n"


def compare_exact(response, answer, params):
    return {"is_correct": response == answer}


@pytest.fixture
def docs_dir(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "user.md").write_bytes(USER_DOC)
    (docs / "dev.md").write_bytes(DEV_DOC)
    return docs


@pytest.fixture
def make_deployment(docs_dir, tmp_path):
    """Build a Deployment around any callable, with real doc files on disk."""

    def _make(func=compare_exact, evaluation_tests_path=None):
        return Deployment(
            evaluation_function=func,
            docs_user_path=docs_dir / "user.md",
            docs_dev_path=docs_dir / "dev.md",
            evaluation_tests_path=evaluation_tests_path or tmp_path / "missing_tests.py",
        )

    return _make
