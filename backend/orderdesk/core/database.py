"""
PostgreSQL database access

This module centralizes every way the backend reaches the database:
- SQLAlchemy engine (schema creation from the declarative models)
- psycopg2 direct connections (all handler SQL, RealDictCursor rows)

Connections are always acquired through context managers, so they are
released on success, on handled errors and on unhandled errors alike.
psycopg2 exceptions never leave this module: translate_error() maps them
onto the DataAccessError hierarchy.

Author: TM3
Date: 2026-10-12
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

import psycopg2
from psycopg2.extras import RealDictCursor
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import declarative_base

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.exceptions import (
    AuthenticationError,
    ConnectivityError,
    ConstraintError,
    DataAccessError,
    QueryError,
)

logger = logging.getLogger(__name__)

# SQLSTATE class 28: invalid authorization specification / invalid password
AUTH_SQLSTATE_PREFIX = "28"


# ============================================================================
# SQLAlchemy Configuration (schema only)
# ============================================================================

# Declarative base for the table models
Base = declarative_base()


def create_engine_for(config: DatabaseConfig) -> Engine:
    """
    Build a SQLAlchemy engine for the given connection parameters

    Used for schema creation; request handlers use psycopg2 directly.
    """
    url = URL.create(
        "postgresql+psycopg2",
        username=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.dbname,
    )
    return create_engine(
        url,
        pool_pre_ping=True,
        connect_args={"sslmode": config.sslmode, "connect_timeout": config.connect_timeout},
    )


# ============================================================================
# Error translation
# ============================================================================

def _is_auth_failure(error: Exception) -> bool:
    pgcode = getattr(error, "pgcode", None)
    if pgcode and pgcode.startswith(AUTH_SQLSTATE_PREFIX):
        return True
    return "authentication failed" in str(error).lower()


def translate_error(error: Exception, connecting: bool = False) -> DataAccessError:
    """
    Map a psycopg2 exception onto the DataAccessError hierarchy

    Args:
        error: Exception raised by psycopg2
        connecting: True when the error happened while opening the connection

    Returns:
        DataAccessError subclass (caller raises it `from error`)
    """
    message = str(error).strip() or error.__class__.__name__
    details = {"pgcode": error.pgcode} if getattr(error, "pgcode", None) else None

    if isinstance(error, psycopg2.OperationalError):
        if _is_auth_failure(error):
            return AuthenticationError(f"Authentication to database failed: {message}", details)
        if connecting:
            return ConnectivityError(f"Could not connect to database: {message}", details)
        return ConnectivityError(f"Database connection lost: {message}", details)

    if isinstance(error, psycopg2.IntegrityError):
        return ConstraintError(f"Constraint violation: {message}", details)

    if isinstance(error, psycopg2.Error):
        return QueryError(f"Query failed: {message}", details)

    return DataAccessError(f"Unexpected database error: {message}")


# ============================================================================
# psycopg2 Direct Connections
# ============================================================================

def open_connection(config: DatabaseConfig):
    """
    Open a psycopg2 connection that returns rows as dictionaries

    Prefer get_db_connection() / unit_of_work(); callers of this function
    own the connection and must close it.

    Raises:
        ConnectivityError / AuthenticationError: if the connection cannot be made
    """
    logger.debug(f"Connecting to database {config.dbname} as {config.user} at {config.host}:{config.port}")
    try:
        return psycopg2.connect(cursor_factory=RealDictCursor, **config.connect_kwargs())
    except psycopg2.Error as e:
        raise translate_error(e, connecting=True) from e


@contextmanager
def get_db_connection(config: DatabaseConfig) -> Iterator[Any]:
    """
    Context manager for a PostgreSQL connection

    Rolls back on any exception and always closes the connection.

    Usage:
        with get_db_connection(config) as conn:
            with conn.cursor() as cursor:
                ...
    """
    conn = open_connection(config)
    try:
        yield conn
    except Exception:
        try:
            conn.rollback()
        except psycopg2.Error as rollback_error:
            logger.warning(f"Rollback failed while releasing connection: {rollback_error}")
        raise
    finally:
        conn.close()
        logger.debug("Database connection closed")


@contextmanager
def unit_of_work(config: DatabaseConfig) -> Iterator[Any]:
    """
    Run a block of statements as one all-or-nothing transaction

    Yields a cursor. The transaction commits when the block exits normally
    and rolls back when it raises; a failing COMMIT is translated and
    re-raised after rollback.

    Usage:
        with unit_of_work(config) as cursor:
            execute_statement(cursor, "INSERT ...", (...))
    """
    with get_db_connection(config) as conn:
        cursor = conn.cursor()
        try:
            yield cursor
            try:
                conn.commit()
            except psycopg2.Error as e:
                raise translate_error(e) from e
        finally:
            cursor.close()


def execute_statement(
    cursor,
    query: str,
    parameters: Optional[Sequence[Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Execute one parameterized statement on an open cursor

    Returns:
        Rows as dictionaries (empty list when the statement returns no rows)

    Raises:
        DataAccessError subclass on failure
    """
    try:
        cursor.execute(query, parameters)
        if cursor.description is None:
            return []
        return [dict(row) for row in cursor.fetchall()]
    except psycopg2.Error as e:
        raise translate_error(e) from e


def execute(
    config: DatabaseConfig,
    query: str,
    parameters: Optional[Sequence[Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Execute a single statement in its own connection and transaction

    Args:
        config: Connection parameters
        query: SQL with %s placeholders
        parameters: Values for the placeholders

    Returns:
        Rows as dictionaries

    Raises:
        ConnectivityError, AuthenticationError, QueryError, ConstraintError
    """
    with unit_of_work(config) as cursor:
        return execute_statement(cursor, query, parameters)
