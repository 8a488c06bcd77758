"""Evaluation Function API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers keep every response in envelope shape
    - The deployment is loaded during startup so a bad import path fails the boot

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from evaluation_base import __version__
from evaluation_base.api.dependencies import get_dispatcher
from evaluation_base.api.error_handlers import register_error_handlers
from evaluation_base.api.routes import evaluate, health
from evaluation_base.config import get_settings
from evaluation_base.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    dispatch = app.dependency_overrides.get(get_dispatcher, get_dispatcher)()
    logger.info(f"Evaluation function API started ({', '.join(dispatch.commands)})")
    yield
    logger.info("Evaluation function API shutting down")


app = FastAPI(
    title="Evaluation Function API", version=__version__, lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(evaluate.router)

register_error_handlers(app)
