"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Email uniqueness is delegated to the users.email UNIQUE constraint:
create_user uses INSERT ... ON CONFLICT DO NOTHING, so two concurrent
registrations for the same address cannot both succeed, and the loser is
reported as None rather than as a database error.
"""

import logging
from pathlib import Path

from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from tolet.domain.ports import StoredToken, User

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, name, email, password, created_at, updated_at"
_TOKEN_COLUMNS = "id, user_id, name, token, created_at, last_used_at"


def _user_from_row(row: dict) -> User:
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password_hash=row["password"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _token_from_row(row: dict) -> StoredToken:
    return StoredToken(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        token_hash=row["token"],
        created_at=row["created_at"],
        last_used_at=row["last_used_at"],
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def create_user(self, name: str, email: str, password_hash: str) -> User | None:
        sql = f"""
            INSERT INTO users (name, email, password, created_at, updated_at)
            VALUES (%s, %s, %s, NOW(), NOW())
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (name, email, password_hash))
            row = cursor.fetchone()
            conn.commit()

        if row is None:
            return None
        return _user_from_row(row)

    def get_user(self, user_id: int) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (user_id,))
            row = cursor.fetchone()

        return _user_from_row(row) if row is not None else None

    def find_user_by_email(self, email: str) -> User | None:
        sql = f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (email,))
            row = cursor.fetchone()

        return _user_from_row(row) if row is not None else None

    def create_token(self, user_id: int, name: str, token_hash: str) -> StoredToken:
        sql = f"""
            INSERT INTO personal_access_tokens (user_id, name, token, created_at)
            VALUES (%s, %s, %s, NOW())
            RETURNING {_TOKEN_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (user_id, name, token_hash))
            row = cursor.fetchone()
            conn.commit()

        return _token_from_row(row)

    def find_token(self, token_id: int) -> StoredToken | None:
        sql = f"SELECT {_TOKEN_COLUMNS} FROM personal_access_tokens WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor(row_factory=dict_row) as cursor:
            cursor.execute(sql, (token_id,))
            row = cursor.fetchone()

        return _token_from_row(row) if row is not None else None

    def touch_token(self, token_id: int) -> None:
        with self._pool.connection() as conn:
            conn.execute(
                "UPDATE personal_access_tokens SET last_used_at = NOW() WHERE id = %s",
                (token_id,),
            )
            conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: tolet/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
