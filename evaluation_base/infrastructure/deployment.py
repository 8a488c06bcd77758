"""Deployment Wiring — resolves settings into the one function this image serves.

Invariants:
    - Deployment is immutable once loaded
    - A bad import path or non-callable target fails at startup, never per request
    - Artifact paths are not checked for existence here: a missing doc or test file
      is reported by the command that needs it

Design Decisions:
    - Import path string ("module:attr") over entry-point plugins: one function per
      image, chosen at build time
"""

import importlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from evaluation_base.config import Settings

logger = logging.getLogger(__name__)

EvaluationFunction = Callable[[Any, Any, dict], Any]


class DeploymentConfigError(RuntimeError):
    """Deployment settings do not resolve to a usable evaluation function."""


@dataclass(frozen=True)
class Deployment:
    evaluation_function: EvaluationFunction
    docs_user_path: Path
    docs_dev_path: Path
    evaluation_tests_path: Path


def import_callable(target: str) -> tuple[EvaluationFunction, Path]:
    """Import 'module:attr' and return the callable plus its module directory."""
    module_name, _, attr = target.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise DeploymentConfigError(
            f"Cannot import evaluation function module '{module_name}': {exc}",
        ) from exc
    func = getattr(module, attr, None)
    if not callable(func):
        raise DeploymentConfigError(
            f"'{target}' does not name a callable",
        )
    if getattr(module, "__file__", None) is None:
        raise DeploymentConfigError(
            f"Module '{module_name}' has no file location",
        )
    return func, Path(module.__file__).resolve().parent


def load_deployment(settings: Settings) -> Deployment:
    func, module_dir = import_callable(settings.evaluation_function)

    def _path(configured: str | None, default: Path) -> Path:
        return Path(configured) if configured else default

    deployment = Deployment(
        evaluation_function=func,
        docs_user_path=_path(settings.docs_user_path, module_dir / "docs" / "user.md"),
        docs_dev_path=_path(settings.docs_dev_path, module_dir / "docs" / "dev.md"),
        evaluation_tests_path=_path(
            settings.evaluation_tests_path, module_dir / "evaluation_tests.py",
        ),
    )
    logger.info(f"Loaded evaluation function {settings.evaluation_function}")
    return deployment
