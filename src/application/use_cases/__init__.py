"""Application use cases package."""

from .build_exchange_rates import (
    BuildExchangeRatesUseCase,
    ExchangeRatesResult,
)
from .build_price_series import BuildPriceSeriesUseCase, PriceSeriesResult
from .exchange_strategies import ExchangeStrategyResolver

__all__ = [
    "BuildExchangeRatesUseCase",
    "ExchangeRatesResult",
    "BuildPriceSeriesUseCase",
    "PriceSeriesResult",
    "ExchangeStrategyResolver",
]
