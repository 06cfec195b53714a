"""Use case to compute report-currency rates from ledger exchanges."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from src.application.ports.fixed_parity import FixedParityPort
from src.application.ports.split_feed import SplitFeedPort
from src.domain.models import (
    Commodity,
    DiagnosticLog,
    ExchangeAlist,
    PriceSource,
    ReportList,
    SplitRow,
)
from src.domain.services.exchange_totals import (
    aggregate_exchange_cost_totals,
    aggregate_exchange_totals,
)
from src.domain.services.price_series import select_commodity_splits
from src.domain.services.rate_resolution import (
    make_exchange_alist,
    make_exchange_cost_alist,
    resolve_unknown_commodities,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class ExchangeRatesResult:
    """Resolved rates and the diagnostics raised while computing them."""

    report_commodity: Commodity
    rates: ExchangeAlist
    report_list: ReportList
    diagnostics: DiagnosticLog


class BuildExchangeRatesUseCase:
    """Compute one rate per commodity from the exchanges in the ledger."""

    def __init__(
        self,
        split_feed: SplitFeedPort,
        parity: FixedParityPort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            split_feed: Port providing the split snapshot.
            parity: Optional fixed-parity converter.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._split_feed = split_feed
        self._parity = parity
        self._logger = logger or get_app_logger()

    def execute(
        self,
        report_commodity: Commodity,
        end_date: datetime | None = None,
        source: PriceSource | str = PriceSource.AVERAGE_COST,
        account_guids: set[str] | None = None,
        diagnostics: DiagnosticLog | None = None,
        splits: Iterable[SplitRow] | None = None,
    ) -> ExchangeRatesResult:
        """Return the rate of every commodity in the report commodity.

        Args:
            report_commodity: Commodity the rates are expressed in.
            end_date: Optional inclusive upper bound for post dates.
            source: AVERAGE_COST for signed totals, WEIGHTED_AVERAGE for
                absolute totals.
            account_guids: Optional accounts to restrict the snapshot to.
            diagnostics: Optional log to append diagnostics to.
            splits: Optional snapshot used instead of fetching one.

        Returns:
            ExchangeRatesResult: Rates, report list and diagnostics.
        """
        diagnostics = (
            diagnostics if diagnostics is not None
            else DiagnosticLog(self._logger)
        )
        source = PriceSource.parse(source, diagnostics)
        if splits is None:
            splits = self._split_feed.fetch_splits(account_guids, end_date)
        splits = select_commodity_splits(splits)
        if source == PriceSource.WEIGHTED_AVERAGE:
            sumlist = aggregate_exchange_totals(splits, report_commodity)
        else:
            sumlist = aggregate_exchange_cost_totals(splits, report_commodity)
        report_list = resolve_unknown_commodities(
            sumlist,
            report_commodity,
            parity=self._parity,
            diagnostics=diagnostics,
        )
        if source == PriceSource.WEIGHTED_AVERAGE:
            rates = make_exchange_alist(report_list)
        else:
            rates = make_exchange_cost_alist(report_list)

        self._logger.info(
            f"Exchange rates computed: report={report_commodity}, "
            f"splits={len(splits)}, rates={len(rates)}, "
            f"diagnostics={len(diagnostics)}"
        )
        return ExchangeRatesResult(
            report_commodity=report_commodity,
            rates=rates,
            report_list=report_list,
            diagnostics=diagnostics,
        )


__all__ = ["BuildExchangeRatesUseCase", "ExchangeRatesResult"]
