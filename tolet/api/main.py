"""
FastAPI application and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from psycopg_pool import ConnectionPool

from tolet.adapters.repository import InMemoryUserRepository, PostgresUserRepository, run_migrations
from tolet.api.errors import register_exception_handlers
from tolet.api.routes import router
from tolet.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "auth",
        "description": "Account registration, login and bearer token resolution",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates the repository for the configured storage backend
    - For PostgreSQL: opens the connection pool and runs migrations
    - Closes the connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application with %s storage...", settings.storage_backend)

    pool = None
    if settings.storage_backend == "memory":
        app.state.repository = InMemoryUserRepository()
    else:
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app.state.repository = PostgresUserRepository(pool)

    app.state.pool = pool
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="tolet",
    description="To-let property rental API - account registration and bearer tokens",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(router)


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if the application (and database, when configured) is healthy.
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is not None:
        with pool.connection() as conn:
            conn.execute("SELECT 1")

    return {"status": "healthy"}
