"""Tests for commodity handles and commodity-keyed maps."""

from decimal import Decimal

import pytest

from src.domain.models import (
    Commodity,
    CommodityCollector,
    CommodityMap,
    Monetary,
    PairEntry,
    ValueCollector,
    commodities_equivalent,
)


def test_equivalent_handles_share_a_key() -> None:
    """Handles of the same commodity should be equivalent but distinct."""
    first = Commodity("CURRENCY", "EUR")
    second = Commodity(" currency ", "eur", guid="other-guid")

    assert first is not second
    assert first != second
    assert first.equiv(second)
    assert commodities_equivalent(first, second)
    assert not commodities_equivalent(first, None)


def test_iso4217_namespace_counts_as_currency() -> None:
    """Both GnuCash currency namespaces should be recognized."""
    assert Commodity("ISO4217", "USD").is_currency
    assert Commodity("CURRENCY", "USD").is_currency
    assert not Commodity("NASDAQ", "AAPL").is_currency


def test_commodity_map_keeps_first_representative() -> None:
    """Writes through an equivalent handle should keep the first one."""
    original = Commodity("CURRENCY", "USD", guid="usd-1")
    alias = Commodity("CURRENCY", "usd", guid="usd-2")
    mapping: CommodityMap[int] = CommodityMap()

    mapping[original] = 1
    mapping[alias] = 2

    assert len(mapping) == 1
    assert mapping[original] == 2
    assert mapping.commodity_for(alias) is original
    assert alias in mapping
    assert "USD" not in mapping


def test_commodity_map_preserves_insertion_order() -> None:
    """Iteration should follow insertion order."""
    mapping: CommodityMap[str] = CommodityMap()
    for mnemonic in ("USD", "EUR", "GBP"):
        mapping[Commodity("CURRENCY", mnemonic)] = mnemonic.lower()

    assert [c.mnemonic for c in mapping] == ["USD", "EUR", "GBP"]
    assert mapping.values() == ["usd", "eur", "gbp"]


def test_commodity_map_missing_key_raises() -> None:
    """Missing commodities should raise KeyError on item access."""
    mapping: CommodityMap[int] = CommodityMap()

    with pytest.raises(KeyError):
        mapping[Commodity("CURRENCY", "CHF")]
    assert mapping.get(Commodity("CURRENCY", "CHF")) is None


def test_pair_entry_swapped_copies_collectors() -> None:
    """Swapping should not share collectors with the source entry."""
    pair = PairEntry(ValueCollector(Decimal("10")), ValueCollector(Decimal("4")))

    swapped = pair.swapped()
    swapped.value.add(Decimal("1"))

    assert swapped.value.total() == Decimal("5")
    assert swapped.amount.total() == Decimal("10")
    assert pair.amount.total() == Decimal("4")


def test_commodity_collector_merges_equivalent_handles() -> None:
    """Balances of equivalent handles should be summed together."""
    collector = CommodityCollector()
    collector.add(Commodity("CURRENCY", "EUR"), Decimal("10"))
    collector.add_monetary(Monetary(Commodity("currency", "eur"), Decimal("-3")))

    assert len(collector) == 1
    assert collector.get_monetary(Commodity("CURRENCY", "EUR")).amount == Decimal("7")
    assert collector.get_monetary(Commodity("CURRENCY", "USD")).amount == 0
