"""Fold multi-commodity balances into a single commodity."""

from collections.abc import Callable

from src.domain.models import CommodityCollector, Monetary
from src.domain.models.commodities import Commodity

ExchangeFn = Callable[[Monetary, Commodity], Monetary | None]


def sum_collector_commodity(
    collector: CommodityCollector | None,
    domestic: Commodity,
    exchange_fn: ExchangeFn | None,
) -> Monetary | None:
    """Convert every holding of ``collector`` and sum them in ``domestic``.

    Args:
        collector: Multi-commodity balance.
        domestic: Commodity to express the total in.
        exchange_fn: Conversion callable ``(foreign, domestic)``.

    Returns:
        Monetary | None: Total, or None when collector or exchange_fn is
        missing.
    """
    if collector is None or exchange_fn is None:
        return None
    balance = CommodityCollector()
    balance.add(domestic, 0)
    for commodity, amount in collector.items():
        if commodity.equiv(domestic):
            balance.add(domestic, amount)
            continue
        converted = exchange_fn(Monetary(commodity, amount), domestic)
        if converted is not None:
            balance.add(domestic, converted.amount)
    return balance.get_monetary(domestic)


def sum_collector_stocks(
    collector: CommodityCollector | None,
    domestic: Commodity,
    exchange_fn: ExchangeFn | None,
) -> CommodityCollector | None:
    """Convert only non-currency holdings, keeping currencies as they are.

    Args:
        collector: Multi-commodity balance.
        domestic: Commodity stocks and funds are converted into.
        exchange_fn: Conversion callable ``(foreign, domestic)``.

    Returns:
        CommodityCollector | None: Balance still holding its currencies.
    """
    if collector is None:
        return None
    balance = CommodityCollector()
    for commodity, amount in collector.items():
        if commodity.equiv(domestic):
            balance.add(domestic, amount)
        elif commodity.is_currency or exchange_fn is None:
            balance.add(commodity, amount)
        else:
            converted = exchange_fn(Monetary(commodity, amount), domestic)
            if converted is not None:
                balance.add(domestic, converted.amount)
    return balance


__all__ = ["ExchangeFn", "sum_collector_commodity", "sum_collector_stocks"]
