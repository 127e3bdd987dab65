"""
PostgreSQL connection helpers (psycopg2)

Every repository gets its connections from here. Connections are opened per
unit of work and closed by the caller; there is no pool.
"""
import time
import logging
from typing import Optional

import psycopg2
from psycopg2.extras import RealDictCursor

from .config import settings

logger = logging.getLogger(__name__)

CONNECTION_TIMEOUT = settings.DB_CONNECT_TIMEOUT


def _database_url() -> str:
    database_url = settings.DATABASE_URL
    if not database_url:
        raise RuntimeError("DATABASE_URL not configured")
    return database_url


def get_db_connection_with_retry(
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
    dict_cursor: bool = False,
):
    """
    Get a psycopg2 connection with automatic retry on connection failures

    Retries OperationalError (dropped SSL sessions, pooler restarts) with
    exponential backoff. Any other error fails immediately.

    Args:
        max_retries: Maximum number of connection attempts (default: settings.DB_MAX_RETRIES)
        retry_delay: Initial delay between retries in seconds (default: settings.DB_RETRY_DELAY)
        dict_cursor: Use RealDictCursor so rows come back as dicts

    Returns:
        psycopg2 connection object

    Raises:
        psycopg2.OperationalError: If all retry attempts fail

    Example:
        conn = get_db_connection_with_retry()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM orders")
        results = cursor.fetchall()
        cursor.close()
        conn.close()
    """
    database_url = _database_url()
    max_retries = max_retries if max_retries is not None else settings.DB_MAX_RETRIES
    retry_delay = retry_delay if retry_delay is not None else settings.DB_RETRY_DELAY

    connect_kwargs = {"connect_timeout": CONNECTION_TIMEOUT}
    if dict_cursor:
        connect_kwargs["cursor_factory"] = RealDictCursor

    last_error = None

    for attempt in range(1, max_retries + 1):
        try:
            logger.debug(f"Database connection attempt {attempt}/{max_retries}")
            conn = psycopg2.connect(database_url, **connect_kwargs)
            logger.debug(f"Database connection successful on attempt {attempt}")
            return conn

        except psycopg2.OperationalError as e:
            last_error = e
            logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            # Don't sleep after the last attempt
            if attempt < max_retries:
                delay = retry_delay * (2 ** (attempt - 1))
                logger.info(f"Retrying in {delay:.2f} seconds...")
                time.sleep(delay)

    logger.error(f"All {max_retries} connection attempts failed")
    raise last_error if last_error else RuntimeError("Connection failed after all retries")


def get_db_connection_dict_with_retry(
    max_retries: Optional[int] = None,
    retry_delay: Optional[float] = None,
):
    """
    Same as get_db_connection_with_retry but rows come back as dicts

    Example:
        conn = get_db_connection_dict_with_retry()
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM products")
        results = cursor.fetchall()  # Returns list of dicts
    """
    return get_db_connection_with_retry(max_retries, retry_delay, dict_cursor=True)
