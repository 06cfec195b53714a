"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.fixed_parity import FixedParityPort
from src.application.ports.price_database import PriceDatabasePort
from src.application.ports.split_feed import SplitFeedPort
from src.application.use_cases.exchange_strategies import (
    ExchangeStrategyResolver,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.euro_parity import EuroParityTable
from src.infrastructure.gnucash_repository_factory import (
    create_price_database,
    create_split_feed,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.progress import LoggingProgressSink
from src.infrastructure.settings import GnuCashSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_fixed_parity() -> FixedParityPort:
    """Return the legacy euro conversion table."""
    return EuroParityTable()


def build_split_feed(
    db_port: DatabaseEnginePort | None = None,
    settings: GnuCashSettings | None = None,
) -> SplitFeedPort:
    """Return the configured split feed."""
    resolved = settings or GnuCashSettings.from_env()
    return create_split_feed(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
        backend=resolved.backend,
        piecash_path=resolved.piecash_file,
    )


def build_price_database(
    db_port: DatabaseEnginePort | None = None,
    settings: GnuCashSettings | None = None,
) -> PriceDatabasePort:
    """Return the configured price database."""
    resolved = settings or GnuCashSettings.from_env()
    return create_price_database(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
        backend=resolved.backend,
        piecash_path=resolved.piecash_file,
    )


def build_exchange_strategy_resolver(
    db_port: DatabaseEnginePort | None = None,
    settings: GnuCashSettings | None = None,
) -> ExchangeStrategyResolver:
    """Return a resolver wired to the configured backend."""
    resolved_settings = settings or GnuCashSettings.from_env()
    resolved_db = db_port or build_database_adapter()
    return ExchangeStrategyResolver(
        split_feed=build_split_feed(resolved_db, resolved_settings),
        price_database=build_price_database(resolved_db, resolved_settings),
        parity=build_fixed_parity(),
        progress=LoggingProgressSink(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_fixed_parity",
    "build_split_feed",
    "build_price_database",
    "build_exchange_strategy_resolver",
]
