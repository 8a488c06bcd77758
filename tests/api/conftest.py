"""API test fixtures — FastAPI test client with the dispatcher overridden.

Invariants:
    - Every test gets a CommandDispatch over a fake deployment
    - Healthcheck groups are fakes; pytest-backed groups are covered in services tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from evaluation_base.api.dependencies import get_dispatcher
from evaluation_base.main import app
from evaluation_base.services.command_dispatch import CommandDispatch

from tests.services.fake_groups import passing_groups


@pytest.fixture
def dispatch(make_deployment):
    return CommandDispatch(make_deployment(), healthcheck_groups=passing_groups())


@pytest.fixture
async def client(dispatch):
    """FastAPI test client with get_dispatcher overridden."""
    app.dependency_overrides[get_dispatcher] = lambda: dispatch
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
