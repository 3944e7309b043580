"""
Schema bootstrap

Creates the customers / products / orders tables from the SQLAlchemy models
and runs seed scripts. Each script is sent to the server as one batch inside
one transaction; statements are never split client-side.
"""
import logging
from pathlib import Path
from typing import Iterable, Union

from sqlalchemy.exc import DBAPIError

from orderdesk.core.config import DatabaseConfig
from orderdesk.core.database import (
    Base,
    create_engine_for,
    execute_statement,
    translate_error,
    unit_of_work,
)

logger = logging.getLogger(__name__)


def _load_models() -> None:
    # Importing the package registers the tables on Base.metadata
    import orderdesk.models  # noqa: F401


def create_schema(config: DatabaseConfig) -> None:
    """Create all tables that do not exist yet"""
    _load_models()
    engine = create_engine_for(config)
    try:
        Base.metadata.create_all(engine)
    except DBAPIError as e:
        raise translate_error(e.orig) from e
    else:
        logger.info(f"Schema ready in database {config.dbname}: {', '.join(Base.metadata.tables)}")
    finally:
        engine.dispose()


def drop_schema(config: DatabaseConfig) -> None:
    """Drop the tables (orders first, foreign keys are respected)"""
    _load_models()
    engine = create_engine_for(config)
    try:
        Base.metadata.drop_all(engine)
    except DBAPIError as e:
        raise translate_error(e.orig) from e
    else:
        logger.info(f"Schema dropped in database {config.dbname}")
    finally:
        engine.dispose()


def run_sql_script(config: DatabaseConfig, sql_text: str) -> None:
    """
    Execute a multi-statement SQL script as a single batch

    The whole script commits or rolls back together.

    Raises:
        DataAccessError subclass if any statement fails
    """
    if not sql_text.strip():
        logger.info("Skipping empty SQL script")
        return

    with unit_of_work(config) as cursor:
        execute_statement(cursor, sql_text)


def run_sql_files(config: DatabaseConfig, paths: Iterable[Union[str, Path]]) -> int:
    """
    Run SQL files in order, one transaction per file

    Returns:
        Number of files executed
    """
    count = 0
    for path in paths:
        path = Path(path)
        logger.info(f"Executing SQL file: {path.name}")
        run_sql_script(config, path.read_text(encoding="utf-8"))
        count += 1
    return count
