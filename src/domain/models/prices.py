"""Domain models for price series."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.models.commodities import CommodityMap


@dataclass(frozen=True)
class PricePoint:
    """Price of one commodity unit at a point in time."""

    date: datetime
    price: Decimal | None


PriceList = list[PricePoint]
PriceAlist = CommodityMap[PriceList]
ExchangeAlist = CommodityMap[Decimal | None]


__all__ = ["PricePoint", "PriceList", "PriceAlist", "ExchangeAlist"]
