"""Application port for fixed-parity currency conversion."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from src.domain.models import Commodity, Monetary


class FixedParityPort(Protocol):
    """Port converting between members of a fixed-rate currency union."""

    def convert(
        self,
        amount: Decimal,
        foreign: Commodity,
        domestic: Commodity,
        when: datetime | None = None,
    ) -> Monetary | None:
        """Return the converted amount, or None outside the union."""


__all__ = ["FixedParityPort"]
