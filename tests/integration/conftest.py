"""
Fixtures for PostgreSQL-backed integration tests.

Tests using the pool fixture are skipped when the configured database
cannot be reached.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from tolet.adapters.repository.postgres import PostgresUserRepository, run_migrations
from tolet.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests, applying migrations."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL is not reachable")

    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def pg_repository(pool: ConnectionPool) -> PostgresUserRepository:
    """Create repository instance for each test."""
    return PostgresUserRepository(pool)


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty users and tokens before each test."""
    with pool.connection() as conn:
        conn.execute("TRUNCATE personal_access_tokens, users RESTART IDENTITY CASCADE")
        conn.commit()
    yield
