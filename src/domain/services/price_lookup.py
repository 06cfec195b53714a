"""Nearest-in-time price lookups."""

from bisect import bisect_right
from datetime import datetime
from decimal import Decimal

from src.domain.models import PriceAlist, PriceList
from src.domain.models.commodities import Commodity


def find_nearest_price(
    price_list: PriceList,
    when: datetime,
) -> Decimal | None:
    """Return the price closest in time to ``when``.

    Args:
        price_list: Price points sorted by ascending date.
        when: Query timestamp.

    Returns:
        Decimal | None: Closest price; the later point wins exact ties.
    """
    idx = bisect_right([point.date for point in price_list], when)
    earlier = price_list[idx - 1] if idx > 0 else None
    later = price_list[idx] if idx < len(price_list) else None

    if earlier is not None and later is not None:
        if abs(when - earlier.date) < abs(when - later.date):
            return earlier.price
        return later.price
    if earlier is not None:
        return earlier.price
    if later is not None:
        return later.price
    return None


def lookup_nearest_in_time(
    price_alist: PriceAlist,
    commodity: Commodity,
    when: datetime,
) -> Decimal:
    """Return the nearest price of ``commodity``, or zero when unknown."""
    price_list = price_alist.get(commodity)
    if not price_list:
        return Decimal("0")
    price = find_nearest_price(price_list, when)
    return price if price is not None else Decimal("0")


__all__ = ["find_nearest_price", "lookup_nearest_in_time"]
