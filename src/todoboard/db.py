"""
Database connection and query utilities.

Provides a simple interface for executing queries with psycopg,
returning rows as dictionaries. Every statement of a multi-statement
operation must go through the single cursor yielded by transaction(),
which commits once on success and rolls back on failure.

For testing, use set_connection_override() to inject a connection
that will be used instead of creating new ones. This enables
transaction rollback between tests.
"""

from contextlib import contextmanager
from typing import Any, Iterator

import psycopg
from psycopg.rows import dict_row

from todoboard.config import config
from todoboard.errors import Unexpected

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of creating new ones.

    Used by test fixtures to ensure all database operations run
    within a single transaction that can be rolled back.

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Connection Management
# =============================================================================


@contextmanager
def get_connection():
    """
    Context manager for database connections.

    In normal operation:
        - Opens a new connection
        - Commits on successful exit
        - Rolls back on exception
        - Closes connection when done

    With override set (testing):
        - Returns the override connection
        - Does NOT commit, rollback, or close
        - Caller (test fixture) manages the transaction
    """
    if _connection_override is not None:
        yield _connection_override
        return

    conn = psycopg.connect(config.database_url)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def transaction() -> Iterator[psycopg.Cursor]:
    """
    Context manager yielding one dict-row cursor bound to one transaction.

    All statements executed through the cursor commit together when the
    block exits normally. Any exception rolls the whole sequence back;
    psycopg errors are re-raised as Unexpected, repository errors raised
    inside the block propagate unchanged.

    Usage:
        with transaction() as cur:
            cur.execute("INSERT INTO todos ...")
            cur.execute("INSERT INTO todo_labels ...")
    """
    try:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                yield cur
    except psycopg.Error as e:
        raise Unexpected(str(e)) from e


# =============================================================================
# Query Helpers
# =============================================================================


def execute(query: str, params: tuple = None) -> None:
    """
    Execute a query without returning results.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values
    """
    with transaction() as cur:
        cur.execute(query, params)


def fetch_one(query: str, params: tuple = None) -> dict[str, Any] | None:
    """
    Execute a query and return a single row as dict.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        Dict of column names to values, or None if no row found
    """
    with transaction() as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query: str, params: tuple = None) -> list[dict[str, Any]]:
    """
    Execute a query and return all rows as list of dicts.

    Args:
        query: SQL query with %s placeholders
        params: Tuple of parameter values

    Returns:
        List of dicts, empty list if no rows found
    """
    with transaction() as cur:
        cur.execute(query, params)
        return cur.fetchall()
