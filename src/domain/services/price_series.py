"""Build time-ordered price series from exchange splits."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.models import (
    CommodityMap,
    DiagnosticKind,
    DiagnosticLog,
    PriceAlist,
    PriceList,
    PricePoint,
    SplitRow,
)
from src.domain.models.commodities import Commodity
from src.utils.decimal_utils import safe_divide

PriceBuilder = Callable[..., PriceList]


@dataclass(frozen=True)
class _Exchange:
    """A split seen from the target commodity's side."""

    date: datetime
    other_commodity: Commodity
    other_amount: Decimal
    target_amount: Decimal


@dataclass(frozen=True)
class RunningTotals:
    """Accumulated amounts for the weighted-average fold."""

    total_other: Decimal = Decimal("0")
    total_target: Decimal = Decimal("0")

    def step(self, exchange: _Exchange) -> tuple["RunningTotals", PricePoint]:
        """Fold one exchange in and emit the running average."""
        totals = RunningTotals(
            total_other=self.total_other + exchange.other_amount,
            total_target=self.total_target + exchange.target_amount,
        )
        price = safe_divide(totals.total_other, totals.total_target)
        return totals, PricePoint(exchange.date, price)


def select_commodity_splits(
    splits: Iterable[SplitRow],
    commodity: Commodity | None = None,
) -> list[SplitRow]:
    """Keep cross-commodity splits, optionally only those touching a commodity.

    Args:
        splits: Split snapshot.
        commodity: Optional commodity one side of the split must match.

    Returns:
        list[SplitRow]: Matching splits sorted by post date.
    """
    selected = [
        split
        for split in splits
        if split.is_cross_commodity
        and (
            commodity is None
            or commodity.equiv(split.transaction_commodity)
            or commodity.equiv(split.account_commodity)
        )
    ]
    return sorted(selected, key=lambda split: split.post_date)


def build_weighted_average_prices(
    splits: Iterable[SplitRow],
    commodity: Commodity,
    report_commodity: Commodity,
    parity=None,
    diagnostics: DiagnosticLog | None = None,
) -> PriceList:
    """Running average price of ``commodity`` in the report commodity.

    The totals run over every exchange, including value-only splits that
    book a capital gain. Such a split moves the running value without
    moving the running amount, so the average jumps until the next trade.

    Args:
        splits: Splits involving ``commodity``, sorted by post date.
        commodity: Commodity to price.
        report_commodity: Commodity the prices are expressed in.
        parity: Optional fixed-parity converter.
        diagnostics: Optional log receiving unconvertible exchanges.

    Returns:
        PriceList: Non-zero price points in date order.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    totals = RunningTotals()
    points: PriceList = []
    for split in splits:
        exchange = _to_report_exchange(
            split, commodity, report_commodity, parity, diagnostics
        )
        if exchange is None:
            points.append(PricePoint(split.post_date, Decimal("0")))
            continue
        totals, point = totals.step(exchange)
        points.append(point)
    return _nonzero(points)


def build_instantaneous_prices(
    splits: Iterable[SplitRow],
    commodity: Commodity,
    report_commodity: Commodity,
    parity=None,
    diagnostics: DiagnosticLog | None = None,
) -> PriceList:
    """Price of ``commodity`` implied by each split on its own."""
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    points: PriceList = []
    for split in splits:
        exchange = _to_report_exchange(
            split, commodity, report_commodity, parity, diagnostics
        )
        if exchange is None:
            points.append(PricePoint(split.post_date, Decimal("0")))
            continue
        price = safe_divide(exchange.other_amount, exchange.target_amount)
        points.append(PricePoint(exchange.date, price))
    return _nonzero(points)


def build_commodity_price_alist(
    splits: Iterable[SplitRow],
    commodities: Iterable[Commodity],
    report_commodity: Commodity,
    builder: PriceBuilder = build_weighted_average_prices,
    parity=None,
    diagnostics: DiagnosticLog | None = None,
    progress=None,
    start_percent: float | None = None,
    delta_percent: float = 0.0,
) -> PriceAlist:
    """Build one price series per commodity.

    Args:
        splits: Split snapshot shared by all commodities.
        commodities: Commodities to price.
        report_commodity: Commodity the prices are expressed in.
        builder: Series builder (weighted-average or instantaneous).
        parity: Optional fixed-parity converter.
        diagnostics: Optional diagnostics log.
        progress: Optional sink exposing ``report_fraction_done(percent)``.
        start_percent: Progress value before the first commodity; progress
            is only reported when set.
        delta_percent: Progress span covered by all commodities.

    Returns:
        PriceAlist: Price list per commodity.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    snapshot = select_commodity_splits(splits)
    targets = list(commodities)
    alist: PriceAlist = CommodityMap()
    for done, commodity in enumerate(targets, start=1):
        if progress is not None and start_percent is not None:
            progress.report_fraction_done(
                start_percent + delta_percent * done / len(targets)
            )
        alist[commodity] = builder(
            select_commodity_splits(snapshot, commodity),
            commodity,
            report_commodity,
            parity=parity,
            diagnostics=diagnostics,
        )
    return alist


def _orient(split: SplitRow, commodity: Commodity) -> _Exchange:
    if split.transaction_commodity.equiv(commodity):
        return _Exchange(
            date=split.post_date,
            other_commodity=split.account_commodity,
            other_amount=abs(split.amount),
            target_amount=abs(split.value),
        )
    return _Exchange(
        date=split.post_date,
        other_commodity=split.transaction_commodity,
        other_amount=abs(split.value),
        target_amount=abs(split.amount),
    )


def _to_report_exchange(
    split: SplitRow,
    commodity: Commodity,
    report_commodity: Commodity,
    parity,
    diagnostics: DiagnosticLog,
) -> _Exchange | None:
    exchange = _orient(split, commodity)
    if exchange.other_commodity.equiv(report_commodity):
        return exchange
    converted = None
    if parity is not None:
        converted = parity.convert(
            exchange.other_amount,
            exchange.other_commodity,
            report_commodity,
            exchange.date,
        )
    if converted is None:
        diagnostics.record(
            DiagnosticKind.UNCONVERTIBLE_COMMODITY,
            f"Can't convert {exchange.other_amount} "
            f"{exchange.other_commodity} to {report_commodity} "
            f"while pricing {commodity}",
            commodity=commodity.mnemonic,
            other=exchange.other_commodity.mnemonic,
            report=report_commodity.mnemonic,
            date=exchange.date,
        )
        return None
    return _Exchange(
        date=exchange.date,
        other_commodity=report_commodity,
        other_amount=converted.amount,
        target_amount=exchange.target_amount,
    )


def _nonzero(points: PriceList) -> PriceList:
    return [point for point in points if point.price]


__all__ = [
    "RunningTotals",
    "select_commodity_splits",
    "build_weighted_average_prices",
    "build_instantaneous_prices",
    "build_commodity_price_alist",
]
