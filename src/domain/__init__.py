"""Domain package for commodity rates and price series."""

from .models import (
    Commodity,
    CommodityCollector,
    CommodityMap,
    Diagnostic,
    DiagnosticKind,
    DiagnosticLog,
    Monetary,
    PricePoint,
    PriceSource,
    SplitRow,
)

__all__ = [
    "Commodity",
    "CommodityCollector",
    "CommodityMap",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticLog",
    "Monetary",
    "PricePoint",
    "PriceSource",
    "SplitRow",
]
