"""Resolve aggregated pair totals into rates against the report commodity."""

from decimal import Decimal

from src.domain.models import (
    CommodityMap,
    DiagnosticKind,
    DiagnosticLog,
    ExchangeAlist,
    PairEntry,
    ReportList,
    SumList,
    ValueCollector,
)
from src.domain.models.commodities import Commodity
from src.utils.decimal_utils import round_sigfigs, safe_divide

RATE_SIGFIGS = 8
PRODUCT_SIGFIGS = 9


def resolve_unknown_commodities(
    sumlist: SumList,
    report_commodity: Commodity,
    parity=None,
    diagnostics: DiagnosticLog | None = None,
) -> ReportList:
    """Relate every aggregated commodity to the report commodity.

    Pairs already involving the report commodity are taken as they are.
    Other pairs are bridged through a commodity already present in the
    report list, one hop at a time, in a single pass over ``sumlist``.
    Commodities that need more than one indirect hop stay unresolved.

    Args:
        sumlist: Pair totals from the aggregator.
        report_commodity: Commodity all rates are expressed in.
        parity: Optional fixed-parity converter exposing
            ``convert(amount, foreign, domestic, when=None)``.
        diagnostics: Optional log receiving unresolvable and ambiguous
            pairs.

    Returns:
        ReportList: Totals per commodity, value in the report commodity.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
    reportlist: ReportList = CommodityMap()
    for commodity, pair in (sumlist.get(report_commodity) or CommodityMap()).items():
        reportlist[commodity] = pair

    for outer, pairs in sumlist.items():
        if outer.equiv(report_commodity):
            continue
        for inner, pair in pairs.items():
            if inner.equiv(report_commodity):
                # The report commodity ended up on the inner side.
                reportlist[outer] = pair.swapped()
                continue

            bridge_outer = reportlist.get(outer) or _parity_bridge(
                outer, pair, report_commodity, parity
            )
            bridge_inner = reportlist.get(inner)

            if bridge_outer is None and bridge_inner is None:
                diagnostics.record(
                    DiagnosticKind.UNRESOLVABLE_RATE,
                    f"Can't calculate rate for {pair.value.total()} "
                    f"{outer} = {pair.amount.total()} {inner} "
                    f"to {report_commodity}",
                    base=outer.mnemonic,
                    other=inner.mnemonic,
                    report=report_commodity.mnemonic,
                )
                continue
            if bridge_outer is not None and bridge_inner is not None:
                diagnostics.record(
                    DiagnosticKind.AMBIGUOUS_RATE,
                    f"Exchange rate ambiguity for {pair.value.total()} "
                    f"{outer} = {pair.amount.total()} {inner} "
                    f"to {report_commodity}",
                    base=outer.mnemonic,
                    other=inner.mnemonic,
                    report=report_commodity.mnemonic,
                )
                continue

            if bridge_outer is None:
                reportlist[outer] = _derive_rate(
                    pair.value, pair.amount, bridge_inner
                )
            else:
                reportlist[inner] = _derive_rate(
                    pair.amount, pair.value, bridge_outer
                )

    return reportlist


def make_exchange_alist(reportlist: ReportList) -> ExchangeAlist:
    """Turn absolute report totals into positive unit rates."""
    alist: ExchangeAlist = CommodityMap()
    for commodity, pair in reportlist.items():
        rate = safe_divide(pair.value.total(), pair.amount.total())
        alist[commodity] = abs(round_sigfigs(rate, RATE_SIGFIGS))
    return alist


def make_exchange_cost_alist(reportlist: ReportList) -> ExchangeAlist:
    """Turn signed report totals into unit rates.

    Commodities whose amounts cancel out to zero get ``None``.
    """
    alist: ExchangeAlist = CommodityMap()
    for commodity, pair in reportlist.items():
        amount = pair.amount.total()
        if not amount:
            alist[commodity] = None
            continue
        alist[commodity] = round_sigfigs(
            pair.value.total() / amount, RATE_SIGFIGS
        )
    return alist


def _derive_rate(
    unknown: ValueCollector,
    known: ValueCollector,
    bridge: PairEntry,
) -> PairEntry:
    """Express ``unknown`` in the report commodity through ``bridge``.

    ``known`` is the same exchange counted in the bridge commodity; the
    bridge converts it with value/amount.
    """
    product = round_sigfigs(
        known.total() * bridge.value.total(), PRODUCT_SIGFIGS
    )
    converted = round_sigfigs(
        safe_divide(product, bridge.amount.total()), RATE_SIGFIGS
    )
    return PairEntry(value=ValueCollector(converted), amount=unknown.copy())


def _parity_bridge(
    outer: Commodity,
    pair: PairEntry,
    report_commodity: Commodity,
    parity,
) -> PairEntry | None:
    if parity is None:
        return None
    converted = parity.convert(pair.value.total(), outer, report_commodity)
    if converted is None:
        return None
    return PairEntry(
        value=ValueCollector(converted.amount),
        amount=pair.value.copy(),
    )


__all__ = [
    "RATE_SIGFIGS",
    "resolve_unknown_commodities",
    "make_exchange_alist",
    "make_exchange_cost_alist",
]
