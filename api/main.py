import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.routers import auth, daily_entries, dashboard, health
from trade_journal.config import Settings, settings as default_settings
from trade_journal.db.session import Database
from trade_journal.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None, database: Optional[Database] = None
) -> FastAPI:
    """
    Build the API around an explicit settings object and database handle.

    Tests pass their own ``Database`` (usually in-memory SQLite); the
    module-level ``app`` below uses the environment-driven defaults.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    settings.warn_if_insecure()

    owns_database = database is None
    if owns_database:
        database = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        yield
        if owns_database:
            database.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Daily trading journal with dashboard analytics.",
        version=settings.PROJECT_VERSION,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Registration, login and the current user."},
            {"name": "daily-entries", "description": "Per-day trading results on the calendar."},
            {"name": "dashboard", "description": "Aggregated performance analytics."},
        ],
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if logging.getLevelName(settings.LOG_LEVEL) <= logging.INFO:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "%s %s -> %d (%.1f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
            return response

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "Database error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    # Include routers
    app.include_router(health.router, prefix="/api/health", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(
        daily_entries.router, prefix="/api/daily-entries", tags=["daily-entries"]
    )
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])

    return app


app = create_app()
