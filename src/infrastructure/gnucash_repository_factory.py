"""Factory helpers to select the GnuCash backend."""

import os
from pathlib import Path

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.price_database import PriceDatabasePort
from src.application.ports.split_feed import SplitFeedPort
from src.infrastructure.gnucash_repository import (
    SqlAlchemyPriceDatabase,
    SqlAlchemySplitFeed,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.piecash_repository import (
    PieCashPriceDatabase,
    PieCashSplitFeed,
)

SUPPORTED_BACKENDS = ("sqlalchemy", "piecash")


def _normalize_piecash_path(
    raw_path: str | Path | None,
    logger,
) -> Path | str | None:
    """Normalize and validate the piecash file path.

    Args:
        raw_path: Raw file path string, URI or Path instance.
        logger: Logger used for warnings.

    Returns:
        Path | str | None: Normalized path or URI when provided.
    """
    if not raw_path:
        logger.warning(
            "Missing piecash file path; set PIECASH_FILE to enable the backend"
        )
        return None
    if isinstance(raw_path, str) and "://" in raw_path:
        return raw_path
    path = Path(raw_path).expanduser().resolve()
    if not path.exists():
        logger.warning("PieCash file does not exist at %s", path)
    return path


def _select_backend(backend: str | None) -> str:
    selected = (
        backend or os.getenv("GNUCASH_BACKEND", "sqlalchemy")
    ).strip().lower()
    if selected not in SUPPORTED_BACKENDS:
        raise ValueError(
            "Unsupported GnuCash backend: "
            f"{selected}. Expected sqlalchemy or piecash."
        )
    return selected


def _piecash_location(piecash_path, logger) -> Path | str:
    path = _normalize_piecash_path(
        piecash_path or os.getenv("PIECASH_FILE"),
        logger,
    )
    if path is None:
        raise RuntimeError("PieCash backend requires a PIECASH_FILE path.")
    return path


def create_split_feed(
    db_port: DatabaseEnginePort,
    logger=None,
    backend: str | None = None,
    piecash_path: str | Path | None = None,
) -> SplitFeedPort:
    """Return a split feed implementation based on configuration.

    Args:
        db_port: Port providing access to the GnuCash engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        backend: Optional backend override (sqlalchemy or piecash).
        piecash_path: Optional path override for the piecash backend.

    Returns:
        SplitFeedPort: Concrete split feed.
    """
    resolved_logger = logger or get_app_logger()
    if _select_backend(backend) == "sqlalchemy":
        return SqlAlchemySplitFeed(db_port)
    return PieCashSplitFeed(
        _piecash_location(piecash_path, resolved_logger),
        logger=resolved_logger,
    )


def create_price_database(
    db_port: DatabaseEnginePort,
    logger=None,
    backend: str | None = None,
    piecash_path: str | Path | None = None,
) -> PriceDatabasePort:
    """Return a price database implementation based on configuration.

    Args:
        db_port: Port providing access to the GnuCash engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        backend: Optional backend override (sqlalchemy or piecash).
        piecash_path: Optional path override for the piecash backend.

    Returns:
        PriceDatabasePort: Concrete price database.
    """
    resolved_logger = logger or get_app_logger()
    if _select_backend(backend) == "sqlalchemy":
        return SqlAlchemyPriceDatabase(db_port)
    return PieCashPriceDatabase(
        _piecash_location(piecash_path, resolved_logger),
        logger=resolved_logger,
    )


__all__ = ["create_split_feed", "create_price_database"]
