"""Aggregate exchanged amounts per commodity pair."""

from collections.abc import Iterable

from src.domain.models import (
    CommodityMap,
    PairEntry,
    SplitRow,
    SumList,
)
from src.domain.models.commodities import Commodity


def aggregate_exchange_totals(
    splits: Iterable[SplitRow],
    report_commodity: Commodity,
) -> SumList:
    """Sum absolute exchanged amounts per commodity pair.

    Args:
        splits: Split snapshot to aggregate.
        report_commodity: Commodity seeding the first base entry.

    Returns:
        SumList: Pair totals keyed by base then other commodity.
    """
    return _aggregate(splits, report_commodity, signed=False)


def aggregate_exchange_cost_totals(
    splits: Iterable[SplitRow],
    report_commodity: Commodity,
) -> SumList:
    """Sum signed exchanged amounts per pair, skipping trading accounts.

    Trading splits mirror every exchange with the opposite sign, so
    including them would cancel the totals out.

    Args:
        splits: Split snapshot to aggregate.
        report_commodity: Commodity seeding the first base entry.

    Returns:
        SumList: Signed pair totals keyed by base then other commodity.
    """
    return _aggregate(splits, report_commodity, signed=True)


def _aggregate(
    splits: Iterable[SplitRow],
    report_commodity: Commodity,
    *,
    signed: bool,
) -> SumList:
    sumlist: SumList = CommodityMap()
    sumlist[report_commodity] = CommodityMap()

    for split in splits:
        if not split.is_cross_commodity:
            continue
        if not split.amount:
            # Without a quantity nothing was exchanged.
            continue
        if signed and split.is_trading:
            continue
        amount = split.amount if signed else abs(split.amount)
        value = split.value if signed else abs(split.value)
        txn_comm = split.transaction_commodity
        acct_comm = split.account_commodity

        base = sumlist.commodity_for(txn_comm)
        if base is None:
            base = sumlist.commodity_for(acct_comm)

        if base is None:
            # Roles are reversed relative to the new account-side base.
            if signed:
                amount, value = -amount, -value
            pair = PairEntry()
            pair.value.add(amount)
            pair.amount.add(value)
            inner: CommodityMap[PairEntry] = CommodityMap()
            inner[txn_comm] = pair
            sumlist[acct_comm] = inner
            continue

        if txn_comm.equiv(base):
            other, base_side, other_side = acct_comm, value, amount
        else:
            other, base_side, other_side = txn_comm, amount, value
            if signed:
                base_side, other_side = -base_side, -other_side
        pair = sumlist[base].setdefault(other, PairEntry())
        pair.value.add(base_side)
        pair.amount.add(other_side)

    return sumlist


__all__ = ["aggregate_exchange_totals", "aggregate_exchange_cost_totals"]
