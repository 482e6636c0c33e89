"""
db/connection.py
----------------
The single PostgreSQL pool behind the transaction, budget and user
repositories.

main.py opens it before polling starts and closes it after polling stops.
Each repository method borrows one connection for one statement and gives
it back in its ``finally`` block, so a handler never holds a connection
across an ``await``. Cursors are RealDictCursor: NUMERIC amounts come back
as ``Decimal`` and rows map onto the dataclasses by column name.
"""

import psycopg2
from psycopg2 import extras, pool

from config import DATABASE_URL, DB_HOST, DB_NAME, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str = DATABASE_URL) -> None:
    """
    Open the pool for the bot's lifetime. A second call is a no-op.

    Handlers run one at a time on the event loop, so ``DB_POOL_MAX`` only
    needs to cover the schema setup and the occasional overlapping update.

    Raises:
        psycopg2.OperationalError: The database is down or the credentials
            in ``.env`` are wrong. The bot does not start in that case.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(
            min_conn, max_conn, dsn, cursor_factory=extras.RealDictCursor
        )
    except psycopg2.OperationalError as e:
        logger.error(f"Could not connect to {DB_NAME} on {DB_HOST}: {e}")
        raise
    logger.info(f"Connection pool ready ({min_conn}-{max_conn} connections to {DB_NAME}).")


def get_connection():
    """
    Borrow a connection for one repository call.

    Raises:
        RuntimeError: If main.py has not opened the pool yet.
    """
    if _pool is None:
        raise RuntimeError("Connection pool is not open; call init_pool() at startup.")
    return _pool.getconn()


def release_connection(conn) -> None:
    # After close_pool() the connection is already closed with the pool
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close every pooled connection once polling has stopped."""
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("Connection pool closed.")
