"""Deck API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to {"error": <message>} responses
    - CORS configured from settings (not hardcoded)
    - The persistence client is built in the lifespan and lives on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - No module-level database singleton: get_db reads app.state.db_manager, tests
      override get_db with an in-memory SQLite session
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deck_api.api.error_handlers import register_error_handlers
from deck_api.api.routes import characters, decks, health, users
from deck_api.config import get_settings
from deck_api.infrastructure.database import DatabaseSessionManager
from deck_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Deck API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Deck API shutting down")


app = FastAPI(title="Deck API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(health.router)
app.include_router(characters.router)
app.include_router(decks.router)
app.include_router(users.router)

register_error_handlers(app)
