"""Engine construction from URLs and database file paths."""

import logging
from typing import Optional
from pathlib import Path

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..errors import IntrospectionError

logger = logging.getLogger(__name__)

DUCKDB_SUFFIXES = {'.duckdb'}


def resolve_database_url(
    url: Optional[str] = None,
    database_path: Optional[str] = None,
    default_url: Optional[str] = None,
) -> str:
    """Work out which SQLAlchemy URL to connect to.

    Args:
        url: Explicit SQLAlchemy URL, used as-is
        database_path: Path to a local database file (can be :memory:).
            ``.duckdb`` files open through the DuckDB dialect, anything
            else as SQLite.
        default_url: Fallback when neither of the above is given

    Returns:
        SQLAlchemy URL string

    Raises:
        IntrospectionError: if no database was specified at all
    """
    if url:
        return url

    if database_path:
        if database_path == ':memory:':
            return "sqlite://"
        path = Path(database_path).expanduser()
        if path.suffix.lower() in DUCKDB_SUFFIXES:
            return f"duckdb:///{path}"
        return f"sqlite:///{path}"

    if default_url:
        return default_url

    raise IntrospectionError(
        "No database specified. Pass --url or --database, "
        "or set MODELGEN_DATABASE_URL."
    )


def open_engine(url: str) -> Engine:
    """Create an engine and check that it can connect."""
    try:
        engine = create_engine(url)
    except (SQLAlchemyError, ImportError) as e:
        raise IntrospectionError(
            f"Cannot create database engine: {e}",
        ) from e

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        engine.dispose()
        raise IntrospectionError(
            f"Could not connect to database: {e}",
        ) from e

    logger.debug("Connected to %s", engine.url.render_as_string(hide_password=True))
    return engine
