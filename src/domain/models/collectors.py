"""Mutable accumulators used while aggregating splits."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.models.commodities import Commodity, CommodityMap, Monetary


class ValueCollector:
    """Running sum of Decimal quantities."""

    def __init__(self, initial: Decimal | int = 0) -> None:
        self._total = Decimal(initial)

    def add(self, quantity: Decimal) -> None:
        self._total += quantity

    def total(self) -> Decimal:
        return self._total

    def copy(self) -> "ValueCollector":
        return ValueCollector(self._total)

    def __repr__(self) -> str:
        return f"ValueCollector({self._total})"


@dataclass
class PairEntry:
    """Exchanged totals between a base commodity and another commodity.

    Attributes:
        value: Total counted in the base commodity.
        amount: Total counted in the other commodity.
    """

    value: ValueCollector = field(default_factory=ValueCollector)
    amount: ValueCollector = field(default_factory=ValueCollector)

    def swapped(self) -> "PairEntry":
        """Return a copy with value and amount exchanged."""
        return PairEntry(value=self.amount.copy(), amount=self.value.copy())


SumList = CommodityMap[CommodityMap[PairEntry]]
ReportList = CommodityMap[PairEntry]


class CommodityCollector:
    """Balance holding several commodities at once."""

    def __init__(self) -> None:
        self._balances: CommodityMap[ValueCollector] = CommodityMap()

    def add(self, commodity: Commodity, amount: Decimal) -> None:
        self._balances.setdefault(commodity, ValueCollector()).add(amount)

    def add_monetary(self, monetary: Monetary) -> None:
        self.add(monetary.commodity, monetary.amount)

    def items(self) -> list[tuple[Commodity, Decimal]]:
        return [
            (commodity, collector.total())
            for commodity, collector in self._balances.items()
        ]

    def get_monetary(self, commodity: Commodity) -> Monetary:
        """Return the balance held in one commodity (zero when absent)."""
        collector = self._balances.get(commodity)
        total = collector.total() if collector else Decimal("0")
        return Monetary(commodity, total)

    def __len__(self) -> int:
        return len(self._balances)


__all__ = [
    "ValueCollector",
    "PairEntry",
    "SumList",
    "ReportList",
    "CommodityCollector",
]
