"""Fixed conversion rates of the legacy euro-area currencies."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Mapping

from src.application.ports.fixed_parity import FixedParityPort
from src.domain.models import Commodity, Monetary
from src.utils.decimal_utils import round_to_fraction

# Units of each currency per euro, as fixed on adoption.
EURO_RATES: Mapping[str, Decimal] = MappingProxyType(
    {
        "EUR": Decimal("1"),
        "ATS": Decimal("13.7603"),
        "BEF": Decimal("40.3399"),
        "CYP": Decimal("0.585274"),
        "DEM": Decimal("1.95583"),
        "EEK": Decimal("15.6466"),
        "ESP": Decimal("166.386"),
        "FIM": Decimal("5.94573"),
        "FRF": Decimal("6.55957"),
        "GRD": Decimal("340.750"),
        "HRK": Decimal("7.53450"),
        "IEP": Decimal(".787564"),
        "ITL": Decimal("1936.27"),
        "LTL": Decimal("3.45280"),
        "LUF": Decimal("40.3399"),
        "LVL": Decimal(".702804"),
        "MTL": Decimal(".429300"),
        "NLG": Decimal("2.20371"),
        "PTE": Decimal("200.482"),
        "SIT": Decimal("239.640"),
        "SKK": Decimal("30.1260"),
    }
)

_EURO_QUANTUM = Decimal("0.000001")


class EuroParityTable(FixedParityPort):
    """Convert between euro-area currencies through their fixed rates.

    Amounts go to euros by division and leave euros by multiplication,
    with the intermediate euro amount rounded to six decimals.
    """

    def __init__(self, rates: Mapping[str, Decimal] = EURO_RATES) -> None:
        self._rates = rates

    def is_member(self, commodity: Commodity) -> bool:
        return commodity.is_currency and commodity.key[1] in self._rates

    def convert(
        self,
        amount: Decimal,
        foreign: Commodity,
        domestic: Commodity,
        when: datetime | None = None,
    ) -> Monetary | None:
        if not (self.is_member(foreign) and self.is_member(domestic)):
            return None
        if foreign.equiv(domestic):
            return Monetary(domestic, amount)
        euros = (amount / self._rates[foreign.key[1]]).quantize(
            _EURO_QUANTUM, rounding=ROUND_HALF_UP
        )
        converted = euros * self._rates[domestic.key[1]]
        return Monetary(domestic, round_to_fraction(converted, domestic.fraction))


__all__ = ["EURO_RATES", "EuroParityTable"]
