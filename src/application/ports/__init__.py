"""Application ports package."""

from .database import DatabaseEnginePort
from .fixed_parity import FixedParityPort
from .price_database import PriceDatabasePort
from .progress import ProgressSinkPort
from .split_feed import SplitFeedPort

__all__ = [
    "DatabaseEnginePort",
    "FixedParityPort",
    "PriceDatabasePort",
    "ProgressSinkPort",
    "SplitFeedPort",
]
