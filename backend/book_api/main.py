"""Book API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as the response envelope
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Run with: uvicorn book_api.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from book_api.api.error_handlers import register_error_handlers
from book_api.api.routes import auth, authors, health, users
from book_api.config import get_settings
from book_api.infrastructure import database
from book_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Book API started")
    yield
    await manager.dispose()
    logger.info("Book API shutting down")


app = FastAPI(title="Book API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(authors.router)

register_error_handlers(app)
