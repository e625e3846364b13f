"""Canteen API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CanteenError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The DatabaseSessionManager is created in the lifespan, carried on
      app.state, and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema is owned by Alembic; AUTO_CREATE_SCHEMA only for local/dev runs
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from canteen.api.error_handlers import register_error_handlers
from canteen.api.routes import auth, companies, health, orders, reports, workers
from canteen.api.routes import settings as display_settings
from canteen.config import get_settings
from canteen.infrastructure.database import DatabaseSessionManager
from canteen.infrastructure.observability import setup_logging

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
    if settings.auto_create_schema:
        await app.state.db_manager.create_schema()
    logger.info("Canteen API started")
    yield
    logger.info("Canteen API shutting down")
    await app.state.db_manager.dispose()


app = FastAPI(title="Canteen API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(orders.router)
app.include_router(reports.router)
app.include_router(workers.router)
app.include_router(companies.router)
app.include_router(display_settings.router)
app.include_router(auth.router)

register_error_handlers(app)
