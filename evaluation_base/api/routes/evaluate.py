"""Evaluate Route — the single invocation endpoint.

Invariants:
    - POST / always answers 200 with an envelope when the body is valid JSON
    - The `command` header is a fallback selector; a body `command` wins

Design Decisions:
    - Sync handler: FastAPI runs it in the threadpool, so a slow evaluation or a
      healthcheck never blocks the event loop
    - Body typed Any: shape checks happen in the dispatcher so failures come back
      as envelopes, not as FastAPI's default 422
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Header
from fastapi.responses import JSONResponse

from evaluation_base.api.dependencies import get_dispatcher
from evaluation_base.services.command_dispatch import CommandDispatch

router = APIRouter(tags=["evaluation"])


@router.post("/")
def evaluate(
    body: Any = Body(None),
    command: str | None = Header(None),
    dispatch: CommandDispatch = Depends(get_dispatcher),
) -> JSONResponse:
    """Dispatch one request and return its envelope."""
    return JSONResponse(content=dispatch.execute(body, header_command=command))
