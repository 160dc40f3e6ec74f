"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so query methods can be called
from several threads at once.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.exceptions import ConnectivityError, translate_error
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str = DATABASE_URL) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: libpq connection string, defaults to DATABASE_URL.

    Raises:
        ConnectivityError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
        logger.info(f"Database connection pool initialized ({min_conn}-{max_conn} connections).")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise ConnectivityError(str(e).strip()) from e


def get_connection():
    """
    Get a connection from the pool.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
        ConnectivityError: If every pooled connection is in use.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    try:
        return _pool.getconn()
    except psycopg2.Error as e:
        logger.error(f"Could not acquire a pooled connection: {e}")
        raise translate_error(e) from e


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    The pool rolls back any open read transaction and discards
    broken connections instead of handing them out again.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
