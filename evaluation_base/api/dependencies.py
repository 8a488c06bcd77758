"""Dependencies — FastAPI providers for the per-process dispatcher.

Invariants:
    - One CommandDispatch per process, built from settings on first use
    - Tests swap it via app.dependency_overrides[get_dispatcher]
"""

from functools import lru_cache

from evaluation_base.config import get_settings
from evaluation_base.infrastructure.deployment import load_deployment
from evaluation_base.services.command_dispatch import CommandDispatch


@lru_cache
def get_dispatcher() -> CommandDispatch:
    return CommandDispatch(load_deployment(get_settings()))
