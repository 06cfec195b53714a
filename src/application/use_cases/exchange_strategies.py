"""Select the conversion strategy matching a configured price source."""

from collections.abc import Iterable
from datetime import datetime

from src.application.ports.fixed_parity import FixedParityPort
from src.application.ports.price_database import PriceDatabasePort
from src.application.ports.progress import ProgressSinkPort
from src.application.ports.split_feed import SplitFeedPort
from src.application.use_cases.build_exchange_rates import (
    BuildExchangeRatesUseCase,
)
from src.application.use_cases.build_price_series import (
    BuildPriceSeriesUseCase,
)
from src.domain.models import Commodity, DiagnosticLog, PriceSource, SplitRow
from src.domain.services.fx import (
    AlistExchange,
    ExchangeStrategy,
    PriceAlistExchange,
    PriceDbLatestExchange,
    PriceDbNearestExchange,
)
from src.infrastructure.logging.logger import get_app_logger


class ExchangeStrategyResolver:
    """Build exchange callables for report code."""

    def __init__(
        self,
        split_feed: SplitFeedPort,
        price_database: PriceDatabasePort,
        parity: FixedParityPort | None = None,
        progress: ProgressSinkPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the resolver.

        Args:
            split_feed: Port providing the split snapshot.
            price_database: Port providing price database quotes.
            parity: Optional fixed-parity converter.
            progress: Optional sink for percent-done updates.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._split_feed = split_feed
        self._price_database = price_database
        self._parity = parity
        self._progress = progress
        self._logger = logger or get_app_logger()

    def exchange_fn(
        self,
        source: PriceSource | str,
        report_commodity: Commodity,
        end_date: datetime | None = None,
        diagnostics: DiagnosticLog | None = None,
        splits: list[SplitRow] | None = None,
    ) -> ExchangeStrategy:
        """Return a strategy converting amounts as of ``end_date``.

        Args:
            source: Price source, or its configuration string.
            report_commodity: Commodity the rates are expressed in.
            end_date: Report date; bounds the split snapshot and pins
                date-dependent lookups.
            diagnostics: Optional log shared with the strategy.
            splits: Optional snapshot from ``snapshot``.

        Returns:
            ExchangeStrategy: Callable ``(foreign, domestic, when=None)``.
        """
        diagnostics = self._diagnostics(diagnostics)
        source = PriceSource.parse(source, diagnostics)

        if source in (PriceSource.AVERAGE_COST, PriceSource.WEIGHTED_AVERAGE):
            result = BuildExchangeRatesUseCase(
                self._split_feed,
                parity=self._parity,
                logger=self._logger,
            ).execute(
                report_commodity,
                end_date=end_date,
                source=source,
                diagnostics=diagnostics,
                splits=splits,
            )
            return AlistExchange(
                result.rates,
                parity=self._parity,
                diagnostics=diagnostics,
            )
        if source == PriceSource.ACTUAL_TRANSACTIONS:
            if splits is None:
                splits = self.snapshot(end_date)
            commodities = self.traded_commodities(
                end_date, report_commodity, splits=splits
            )
            return self._price_alist_exchange(
                source,
                report_commodity,
                commodities,
                end_date,
                diagnostics,
                default_when=end_date,
                splits=splits,
            )
        if source == PriceSource.PRICEDB_LATEST:
            return PriceDbLatestExchange(
                self._price_database,
                parity=self._parity,
                diagnostics=diagnostics,
            )
        return PriceDbNearestExchange(
            self._price_database,
            parity=self._parity,
            diagnostics=diagnostics,
            default_when=end_date,
        )

    def exchange_time_fn(
        self,
        source: PriceSource | str,
        report_commodity: Commodity,
        commodities: Iterable[Commodity],
        end_date: datetime | None = None,
        start_percent: float | None = None,
        delta_percent: float = 0.0,
        diagnostics: DiagnosticLog | None = None,
        splits: list[SplitRow] | None = None,
    ) -> ExchangeStrategy:
        """Return a strategy converting amounts at the date passed per call.

        Args:
            source: Price source, or its configuration string.
            report_commodity: Commodity the prices are expressed in.
            commodities: Commodities the report will convert.
            end_date: Optional bound for the split snapshot.
            start_percent: Optional progress value before pricing starts.
            delta_percent: Progress span covered by pricing.
            diagnostics: Optional log shared with the strategy.
            splits: Optional snapshot from ``snapshot``.

        Returns:
            ExchangeStrategy: Callable ``(foreign, domestic, when)``.
        """
        diagnostics = self._diagnostics(diagnostics)
        source = PriceSource.parse(source, diagnostics)

        if source in (
            PriceSource.AVERAGE_COST,
            PriceSource.WEIGHTED_AVERAGE,
            PriceSource.ACTUAL_TRANSACTIONS,
        ):
            return self._price_alist_exchange(
                source,
                report_commodity,
                commodities,
                end_date,
                diagnostics,
                start_percent=start_percent,
                delta_percent=delta_percent,
                splits=splits,
            )
        if source == PriceSource.PRICEDB_LATEST:
            return PriceDbLatestExchange(
                self._price_database,
                parity=self._parity,
                diagnostics=diagnostics,
            )
        return PriceDbNearestExchange(
            self._price_database,
            parity=self._parity,
            diagnostics=diagnostics,
        )

    def _price_alist_exchange(
        self,
        source: PriceSource,
        report_commodity: Commodity,
        commodities: Iterable[Commodity],
        end_date: datetime | None,
        diagnostics: DiagnosticLog,
        default_when: datetime | None = None,
        start_percent: float | None = None,
        delta_percent: float = 0.0,
        splits: list[SplitRow] | None = None,
    ) -> PriceAlistExchange:
        series = BuildPriceSeriesUseCase(
            self._split_feed,
            parity=self._parity,
            progress=self._progress,
            logger=self._logger,
        ).execute(
            commodities,
            report_commodity,
            end_date=end_date,
            source=source,
            start_percent=start_percent,
            delta_percent=delta_percent,
            diagnostics=diagnostics,
            splits=splits,
        )
        return PriceAlistExchange(
            series.prices,
            parity=self._parity,
            diagnostics=diagnostics,
            price_database=self._price_database,
            default_when=default_when,
        )

    def snapshot(self, end_date: datetime | None) -> list[SplitRow]:
        """Fetch the splits posted up to ``end_date`` once for reuse."""
        return list(self._split_feed.fetch_splits(None, end_date))

    def traded_commodities(
        self,
        end_date: datetime | None,
        report_commodity: Commodity,
        splits: list[SplitRow] | None = None,
    ) -> list[Commodity]:
        """Return every non-report commodity exchanged up to ``end_date``."""
        if splits is None:
            splits = self.snapshot(end_date)
        seen: dict[tuple[str, str], Commodity] = {}
        for split in splits:
            if not split.is_cross_commodity:
                continue
            for commodity in (
                split.transaction_commodity,
                split.account_commodity,
            ):
                if not commodity.equiv(report_commodity):
                    seen.setdefault(commodity.key, commodity)
        return list(seen.values())

    def _diagnostics(self, diagnostics: DiagnosticLog | None) -> DiagnosticLog:
        if diagnostics is not None:
            return diagnostics
        return DiagnosticLog(self._logger)


__all__ = ["ExchangeStrategyResolver"]
