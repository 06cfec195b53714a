"""Exchange monetary amounts between commodities.

Every strategy is a callable ``(foreign, domestic, when=None)`` returning a
``Monetary`` in the domestic commodity. Strategies first try the
fixed-parity table, then identity, then their own rate source. A missing
rate is recorded as a diagnostic and yields a zero amount.
"""

from datetime import datetime
from decimal import Decimal

from src.domain.models import (
    DiagnosticKind,
    DiagnosticLog,
    ExchangeAlist,
    Monetary,
    PriceAlist,
)
from src.domain.models.commodities import Commodity
from src.domain.services.price_lookup import lookup_nearest_in_time
from src.utils.decimal_utils import round_to_fraction


def exchange_by_parity(
    foreign: Monetary,
    domestic: Commodity,
    parity,
    when: datetime | None = None,
) -> Monetary | None:
    """Convert through the fixed-parity table when both sides belong to it."""
    if parity is None:
        return None
    return parity.convert(foreign.amount, foreign.commodity, domestic, when)


def exchange_if_same(
    foreign: Monetary,
    domestic: Commodity,
) -> Monetary | None:
    """Return ``foreign`` unchanged when it is already domestic."""
    if foreign.commodity.equiv(domestic):
        return foreign
    return None


class ExchangeStrategy:
    """Base conversion strategy.

    Subclasses implement ``_exchange`` for their own rate source.
    """

    def __init__(
        self,
        parity=None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        """Initialize the strategy.

        Args:
            parity: Optional fixed-parity converter.
            diagnostics: Optional log receiving NO_PRICE_FOUND entries.
        """
        self._parity = parity
        self.diagnostics = (
            diagnostics if diagnostics is not None else DiagnosticLog()
        )

    def __call__(
        self,
        foreign: Monetary | None,
        domestic: Commodity,
        when: datetime | None = None,
    ) -> Monetary | None:
        if foreign is None:
            return None
        converted = exchange_by_parity(foreign, domestic, self._parity, when)
        if converted is not None:
            return converted
        same = exchange_if_same(foreign, domestic)
        if same is not None:
            return same
        return self._exchange(foreign, domestic, when)

    def _exchange(
        self,
        foreign: Monetary,
        domestic: Commodity,
        when: datetime | None,
    ) -> Monetary:
        raise NotImplementedError

    def _convert(
        self,
        foreign: Monetary,
        domestic: Commodity,
        rate: Decimal,
    ) -> Monetary:
        amount = round_to_fraction(foreign.amount * rate, domestic.fraction)
        return Monetary(domestic, amount)

    def _no_price(
        self,
        foreign: Monetary,
        domestic: Commodity,
        when: datetime | None,
        source: str,
    ) -> Monetary:
        self.diagnostics.record(
            DiagnosticKind.NO_PRICE_FOUND,
            f"No {source} price to convert {foreign} to {domestic}",
            commodity=foreign.commodity.mnemonic,
            domestic=domestic.mnemonic,
            date=when,
            source=source,
        )
        return Monetary(domestic, Decimal("0"))


class AlistExchange(ExchangeStrategy):
    """Convert with a static commodity -> rate table."""

    def __init__(
        self,
        exchange_alist: ExchangeAlist,
        parity=None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        super().__init__(parity=parity, diagnostics=diagnostics)
        self._alist = exchange_alist

    def _exchange(self, foreign, domestic, when):
        if not foreign.amount:
            return Monetary(domestic, Decimal("0"))
        rate = self._alist.get(foreign.commodity)
        if rate is None:
            return self._no_price(foreign, domestic, when, "exchange-table")
        return self._convert(foreign, domestic, rate)


class PriceDbLatestExchange(ExchangeStrategy):
    """Convert with the latest quote of the price database."""

    def __init__(
        self,
        price_database,
        parity=None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        super().__init__(parity=parity, diagnostics=diagnostics)
        self._price_database = price_database

    def _exchange(self, foreign, domestic, when):
        price = self._price_database.latest_price(foreign.commodity, domestic)
        if not price:
            return self._no_price(foreign, domestic, when, "pricedb-latest")
        return self._convert(foreign, domestic, price)


class PriceDbNearestExchange(ExchangeStrategy):
    """Convert with the price database quote closest to a date.

    ``default_when`` pins the date for callers that do not pass one.
    """

    def __init__(
        self,
        price_database,
        parity=None,
        diagnostics: DiagnosticLog | None = None,
        default_when: datetime | None = None,
    ) -> None:
        super().__init__(parity=parity, diagnostics=diagnostics)
        self._price_database = price_database
        self._default_when = default_when

    def __call__(self, foreign, domestic, when=None):
        return super().__call__(foreign, domestic, when or self._default_when)

    def _exchange(self, foreign, domestic, when):
        if when is None:
            return self._no_price(foreign, domestic, when, "pricedb-nearest")
        price = self._price_database.nearest_price(
            foreign.commodity, domestic, when
        )
        if not price:
            return self._no_price(foreign, domestic, when, "pricedb-nearest")
        return self._convert(foreign, domestic, price)


class PriceAlistExchange(ExchangeStrategy):
    """Convert with per-commodity price series.

    The foreign commodity's nearest price is used first, then the inverse
    of the domestic commodity's nearest price, then the price database
    when one is configured.
    """

    def __init__(
        self,
        price_alist: PriceAlist,
        parity=None,
        diagnostics: DiagnosticLog | None = None,
        price_database=None,
        default_when: datetime | None = None,
    ) -> None:
        super().__init__(parity=parity, diagnostics=diagnostics)
        self._price_alist = price_alist
        self._default_when = default_when
        self._fallback = None
        if price_database is not None:
            self._fallback = PriceDbNearestExchange(
                price_database,
                parity=parity,
                diagnostics=self.diagnostics,
            )

    def __call__(self, foreign, domestic, when=None):
        return super().__call__(foreign, domestic, when or self._default_when)

    def _exchange(self, foreign, domestic, when):
        if when is not None and len(self._price_alist):
            price = lookup_nearest_in_time(
                self._price_alist, foreign.commodity, when
            )
            if price:
                return self._convert(foreign, domestic, price)
            inverse = lookup_nearest_in_time(self._price_alist, domestic, when)
            if inverse:
                return self._convert(foreign, domestic, 1 / inverse)
        if self._fallback is not None:
            return self._fallback(foreign, domestic, when)
        return self._no_price(foreign, domestic, when, "price-series")


def exchange(
    foreign: Monetary | None,
    domestic: Commodity,
    strategy: ExchangeStrategy,
    when: datetime | None = None,
) -> Monetary | None:
    """Convert ``foreign`` into ``domestic`` with the given strategy."""
    return strategy(foreign, domestic, when)


__all__ = [
    "exchange",
    "exchange_by_parity",
    "exchange_if_same",
    "ExchangeStrategy",
    "AlistExchange",
    "PriceAlistExchange",
    "PriceDbLatestExchange",
    "PriceDbNearestExchange",
]
