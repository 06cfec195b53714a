"""Use case to build per-commodity price series from ledger exchanges."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from src.application.ports.fixed_parity import FixedParityPort
from src.application.ports.progress import ProgressSinkPort
from src.application.ports.split_feed import SplitFeedPort
from src.domain.models import (
    Commodity,
    DiagnosticLog,
    PriceAlist,
    PriceSource,
    SplitRow,
)
from src.domain.services.price_series import (
    build_commodity_price_alist,
    build_instantaneous_prices,
    build_weighted_average_prices,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class PriceSeriesResult:
    """Price series per commodity and the diagnostics raised."""

    prices: PriceAlist
    diagnostics: DiagnosticLog


class BuildPriceSeriesUseCase:
    """Build weighted-average or instantaneous price series."""

    def __init__(
        self,
        split_feed: SplitFeedPort,
        parity: FixedParityPort | None = None,
        progress: ProgressSinkPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            split_feed: Port providing the split snapshot.
            parity: Optional fixed-parity converter.
            progress: Optional sink for percent-done updates.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._split_feed = split_feed
        self._parity = parity
        self._progress = progress
        self._logger = logger or get_app_logger()

    def execute(
        self,
        commodities: Iterable[Commodity],
        report_commodity: Commodity,
        end_date: datetime | None = None,
        source: PriceSource | str = PriceSource.WEIGHTED_AVERAGE,
        start_percent: float | None = None,
        delta_percent: float = 0.0,
        diagnostics: DiagnosticLog | None = None,
        splits: Iterable[SplitRow] | None = None,
    ) -> PriceSeriesResult:
        """Return a price list per commodity.

        Args:
            commodities: Commodities to price.
            report_commodity: Commodity the prices are expressed in.
            end_date: Optional inclusive upper bound for post dates.
            source: ACTUAL_TRANSACTIONS for per-split prices; any other
                source builds running averages.
            start_percent: Optional progress value before the first
                commodity.
            delta_percent: Progress span covered by all commodities.
            diagnostics: Optional log to append diagnostics to.
            splits: Optional snapshot already fetched up to ``end_date``.

        Returns:
            PriceSeriesResult: Price lists and diagnostics.
        """
        diagnostics = (
            diagnostics if diagnostics is not None
            else DiagnosticLog(self._logger)
        )
        source = PriceSource.parse(source, diagnostics)
        builder = (
            build_instantaneous_prices
            if source == PriceSource.ACTUAL_TRANSACTIONS
            else build_weighted_average_prices
        )
        if splits is None:
            splits = self._split_feed.fetch_splits(None, end_date)
        prices = build_commodity_price_alist(
            splits,
            commodities,
            report_commodity,
            builder=builder,
            parity=self._parity,
            diagnostics=diagnostics,
            progress=self._progress,
            start_percent=start_percent,
            delta_percent=delta_percent,
        )
        self._logger.info(
            f"Price series built: report={report_commodity}, "
            f"commodities={len(prices)}, source={source.value}"
        )
        return PriceSeriesResult(prices=prices, diagnostics=diagnostics)


__all__ = ["BuildPriceSeriesUseCase", "PriceSeriesResult"]
