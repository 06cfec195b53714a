"""Tests for the legacy euro parity table."""

from decimal import Decimal

from src.domain.models import Commodity
from src.infrastructure.euro_parity import EURO_RATES, EuroParityTable

EUR = Commodity("CURRENCY", "EUR")
DEM = Commodity("CURRENCY", "DEM")
FRF = Commodity("CURRENCY", "FRF")
USD = Commodity("CURRENCY", "USD")
ITL = Commodity("CURRENCY", "ITL", fraction=1)


def test_members_are_euro_area_currencies() -> None:
    """Only currencies listed in the table should be members."""
    table = EuroParityTable()

    assert table.is_member(DEM)
    assert table.is_member(EUR)
    assert not table.is_member(USD)
    assert not table.is_member(Commodity("NASDAQ", "DEM"))


def test_convert_to_euro_divides_by_rate() -> None:
    """Legacy amounts should be divided by their fixed rate."""
    result = EuroParityTable().convert(Decimal("195.583"), DEM, EUR)

    assert result.commodity is EUR
    assert result.amount == Decimal("100")


def test_convert_between_legacy_currencies_goes_through_euro() -> None:
    """Cross conversions should pass through a six-decimal euro amount."""
    result = EuroParityTable().convert(Decimal("100"), DEM, FRF)

    # 100 DEM is 51.129188 EUR.
    assert result.amount == Decimal("335.39")


def test_convert_rounds_to_domestic_fraction() -> None:
    """Results should be rounded to the domestic commodity's unit."""
    result = EuroParityTable().convert(Decimal("1"), EUR, ITL)

    assert result.amount == Decimal("1936")


def test_non_members_are_not_converted() -> None:
    """Pairs outside the table should be left to other strategies."""
    table = EuroParityTable()

    assert table.convert(Decimal("1"), USD, EUR) is None
    assert table.convert(Decimal("1"), DEM, USD) is None


def test_equivalent_members_pass_through() -> None:
    """Converting a member into itself should keep the amount."""
    result = EuroParityTable().convert(Decimal("12.345"), DEM, DEM)

    assert result.amount == Decimal("12.345")
    assert EURO_RATES["EUR"] == Decimal("1")
