"""Domain models for commodities and monetary amounts."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, Iterator, TypeVar

from src.domain.services.normalization import (
    normalize_mnemonic,
    normalize_namespace,
)

CURRENCY_NAMESPACE = "CURRENCY"

V = TypeVar("V")


@dataclass(frozen=True, eq=False)
class Commodity:
    """Handle on a currency or security.

    Handles compare by identity; use ``equiv`` or ``CommodityMap`` to
    compare the underlying commodity.

    Attributes:
        namespace: Commodity namespace (CURRENCY, NASDAQ, FUND, ...).
        mnemonic: Commodity symbol (EUR, AAPL, ...).
        fraction: Smallest units per whole unit (100 for cents).
        guid: Optional GnuCash GUID of the commodity row.
        fullname: Optional display name.
    """

    namespace: str
    mnemonic: str
    fraction: int = 100
    guid: str | None = None
    fullname: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Canonical identifier shared by all equivalent handles."""
        return (
            normalize_namespace(self.namespace) or "",
            normalize_mnemonic(self.mnemonic) or "",
        )

    @property
    def is_currency(self) -> bool:
        return self.key[0] in (CURRENCY_NAMESPACE, "ISO4217")

    def equiv(self, other: "Commodity | None") -> bool:
        """Return True when both handles denote the same commodity."""
        if other is None:
            return False
        return self.key == other.key

    def __str__(self) -> str:
        return self.mnemonic


def commodities_equivalent(
    left: Commodity | None,
    right: Commodity | None,
) -> bool:
    """Equivalence check tolerating missing handles."""
    if left is None or right is None:
        return False
    return left.equiv(right)


@dataclass(frozen=True)
class Monetary:
    """Amount of a given commodity."""

    commodity: Commodity
    amount: Decimal

    def __str__(self) -> str:
        return f"{self.amount} {self.commodity.mnemonic}"


class CommodityMap(Generic[V]):
    """Insertion-ordered mapping keyed by commodity equivalence.

    The first handle stored for a commodity is kept as its representative.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], tuple[Commodity, V]] = {}

    def get(self, commodity: Commodity, default: V | None = None) -> V | None:
        entry = self._entries.get(commodity.key)
        if entry is None:
            return default
        return entry[1]

    def setdefault(self, commodity: Commodity, value: V) -> V:
        entry = self._entries.get(commodity.key)
        if entry is None:
            self._entries[commodity.key] = (commodity, value)
            return value
        return entry[1]

    def commodity_for(self, commodity: Commodity) -> Commodity | None:
        """Return the stored representative of an equivalent commodity."""
        entry = self._entries.get(commodity.key)
        return entry[0] if entry else None

    def items(self) -> list[tuple[Commodity, V]]:
        """Return a snapshot of (commodity, value) pairs."""
        return list(self._entries.values())

    def commodities(self) -> list[Commodity]:
        return [commodity for commodity, _ in self._entries.values()]

    def values(self) -> list[V]:
        return [value for _, value in self._entries.values()]

    def __setitem__(self, commodity: Commodity, value: V) -> None:
        existing = self._entries.get(commodity.key)
        representative = existing[0] if existing else commodity
        self._entries[commodity.key] = (representative, value)

    def __getitem__(self, commodity: Commodity) -> V:
        try:
            return self._entries[commodity.key][1]
        except KeyError:
            raise KeyError(commodity.mnemonic) from None

    def __contains__(self, commodity: object) -> bool:
        if not isinstance(commodity, Commodity):
            return False
        return commodity.key in self._entries

    def __iter__(self) -> Iterator[Commodity]:
        return iter(self.commodities())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{commodity.mnemonic}: {value!r}"
            for commodity, value in self._entries.values()
        )
        return f"CommodityMap({{{body}}})"


__all__ = [
    "CURRENCY_NAMESPACE",
    "Commodity",
    "CommodityMap",
    "Monetary",
    "commodities_equivalent",
]
