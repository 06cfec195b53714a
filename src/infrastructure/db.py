"""Database infrastructure for the GnuCash rate computations.

This module creates and reuses the SQLAlchemy engine connected to the
GnuCash database. It belongs to the infrastructure layer because it deals
with an external system.
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable, loading .env first.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a pooled SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: Engine with a small pool and health checks; SQLite URLs keep
        the dialect default pool.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_gnucash_engine: Optional[Engine] = None


def get_gnucash_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the GnuCash database.

    Returns:
        Engine: Lazily initialized engine connected to the GnuCash backend.
    """
    global _gnucash_engine
    if _gnucash_engine is None:
        db_url = _get_env_var("GNUCASH_DB_URL")
        _gnucash_engine = _create_engine(db_url)
    return _gnucash_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def get_gnucash_engine(self) -> Engine:
        """Get the engine for the GnuCash database.

        Returns:
            Engine: SQLAlchemy engine connected to GnuCash.
        """
        return get_gnucash_engine()


__all__ = ["get_gnucash_engine", "SqlAlchemyDatabaseEngineAdapter"]
