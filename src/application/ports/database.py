"""Database ports for the GnuCash rate computations.

This module defines the application-layer protocol for accessing the
GnuCash database engine. Infrastructure implementations are expected to
provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the GnuCash database engine."""

    def get_gnucash_engine(self) -> Engine:
        """Get the engine for the GnuCash database.

        Returns:
            Engine: SQLAlchemy engine connected to the GnuCash backend.
        """


__all__ = ["DatabaseEnginePort"]
