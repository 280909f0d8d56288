"""CodeDeck API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly
    - Global error handlers map CodeDeckError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Git configuration is NOT checked at startup: recorder operations validate it lazily

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema managed by Alembic (alembic upgrade head), not create_all at startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from codedeck.api.error_handlers import register_error_handlers
from codedeck.infrastructure.database import init_db
from codedeck.infrastructure.observability import setup_logging
from codedeck.config import get_settings
from codedeck.api.routes import attempts, health, problems

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    missing = settings.recorder_config().missing_settings()
    if missing:
        logger.warning(
            f"Git recorder not configured ({', '.join(missing)}); "
            "attempt submissions will fail until these are set",
        )
    logger.info("CodeDeck API started")
    yield
    await manager.close()
    logger.info("CodeDeck API shutting down")


app = FastAPI(
    title="CodeDeck API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(problems.router)
app.include_router(attempts.router)
