"""Tests for reducing multi-commodity balances."""

from decimal import Decimal

from src.domain.models import Commodity, CommodityCollector, Monetary
from src.domain.services.reduction import (
    sum_collector_commodity,
    sum_collector_stocks,
)

EUR = Commodity("CURRENCY", "EUR")
USD = Commodity("CURRENCY", "USD")
ACME = Commodity("NASDAQ", "ACME")


def _collector(*holdings) -> CommodityCollector:
    collector = CommodityCollector()
    for commodity, amount in holdings:
        collector.add(commodity, Decimal(amount))
    return collector


def _doubling(foreign: Monetary, domestic: Commodity) -> Monetary:
    return Monetary(domestic, foreign.amount * 2)


def _failing(foreign: Monetary, domestic: Commodity) -> Monetary:
    raise AssertionError("exchange should not be called")


def test_domestic_only_balance_reduces_to_itself() -> None:
    """Domestic holdings should never go through the exchange function."""
    collector = _collector((EUR, "42.10"))

    result = sum_collector_commodity(collector, EUR, _failing)

    assert result.commodity is EUR
    assert result.amount == Decimal("42.10")


def test_missing_exchange_function_yields_absent_total() -> None:
    """Without an exchange function there is no total."""
    collector = _collector((EUR, "42.10"))

    assert sum_collector_commodity(collector, EUR, None) is None
    assert sum_collector_commodity(None, EUR, _doubling) is None


def test_empty_balance_reduces_to_zero() -> None:
    """An empty balance should sum to a zero domestic amount."""
    result = sum_collector_commodity(CommodityCollector(), EUR, _doubling)

    assert result.amount == 0
    assert result.commodity is EUR


def test_foreign_holdings_are_converted_and_summed() -> None:
    """Every foreign holding should be converted once and added."""
    collector = _collector((EUR, "1"), (USD, "10"), (ACME, "3"))

    result = sum_collector_commodity(collector, EUR, _doubling)

    assert result.amount == Decimal("27")


def test_absent_conversions_are_skipped() -> None:
    """Holdings the exchange function can't convert add nothing."""
    collector = _collector((EUR, "5"), (USD, "10"))

    result = sum_collector_commodity(collector, EUR, lambda foreign, domestic: None)

    assert result.amount == Decimal("5")


def test_stock_reduction_keeps_currencies() -> None:
    """Only securities should be converted into the domestic commodity."""
    collector = _collector((USD, "10"), (ACME, "3"), (EUR, "1"))

    result = sum_collector_stocks(collector, EUR, _doubling)

    balances = {commodity.mnemonic: amount for commodity, amount in result.items()}
    assert balances == {"USD": Decimal("10"), "EUR": Decimal("7")}


def test_stock_reduction_without_exchange_keeps_holdings() -> None:
    """Without an exchange function securities stay as they are."""
    collector = _collector((ACME, "3"))

    result = sum_collector_stocks(collector, EUR, None)

    assert result.get_monetary(ACME).amount == Decimal("3")
    assert sum_collector_stocks(None, EUR, _doubling) is None
