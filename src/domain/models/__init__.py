"""Domain models package."""

from .collectors import (
    CommodityCollector,
    PairEntry,
    ReportList,
    SumList,
    ValueCollector,
)
from .commodities import (
    CURRENCY_NAMESPACE,
    Commodity,
    CommodityMap,
    Monetary,
    commodities_equivalent,
)
from .diagnostics import Diagnostic, DiagnosticKind, DiagnosticLog
from .gnucash_rows import TRADING_ACCOUNT_TYPE, PriceRow, SplitRow
from .price_source import PriceSource
from .prices import ExchangeAlist, PriceAlist, PriceList, PricePoint

__all__ = [
    "CURRENCY_NAMESPACE",
    "TRADING_ACCOUNT_TYPE",
    "Commodity",
    "CommodityCollector",
    "CommodityMap",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "ExchangeAlist",
    "Monetary",
    "PairEntry",
    "PriceAlist",
    "PriceList",
    "PricePoint",
    "PriceRow",
    "PriceSource",
    "ReportList",
    "SplitRow",
    "SumList",
    "ValueCollector",
    "commodities_equivalent",
]
