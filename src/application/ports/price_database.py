"""Application port for the commodity price database."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from src.domain.models import Commodity


class PriceDatabasePort(Protocol):
    """Port exposing quotes of one commodity in another."""

    def latest_price(
        self,
        foreign: Commodity,
        domestic: Commodity,
    ) -> Decimal | None:
        """Return the most recent price of ``foreign`` in ``domestic``."""

    def nearest_price(
        self,
        foreign: Commodity,
        domestic: Commodity,
        when: datetime,
    ) -> Decimal | None:
        """Return the price of ``foreign`` in ``domestic`` closest to ``when``."""


__all__ = ["PriceDatabasePort"]
