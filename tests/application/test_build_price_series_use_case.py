"""Tests for the BuildPriceSeriesUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.build_price_series import (
    BuildPriceSeriesUseCase,
)
from src.domain.models import PriceSource


def _use_case(ledger, progress=None):
    split_feed = MagicMock()
    split_feed.fetch_splits.return_value = ledger.splits
    use_case = BuildPriceSeriesUseCase(
        split_feed,
        progress=progress,
        logger=MagicMock(),
    )
    return use_case, split_feed


def test_weighted_average_series_accumulates_exchanges(ledger) -> None:
    """Running averages should include every exchange of the commodity."""
    use_case, split_feed = _use_case(ledger)

    result = use_case.execute([ledger.acme], ledger.eur, end_date=ledger.day10)

    prices = result.prices[ledger.acme]
    assert [point.date for point in prices] == [
        ledger.day1,
        ledger.day5,
        ledger.day5,
    ]
    assert prices[0].price == Decimal("150")
    assert prices[1].price == Decimal("2300") / Decimal("15")
    assert prices[2].price == Decimal("3100") / Decimal("20")
    split_feed.fetch_splits.assert_called_once_with(None, ledger.day10)


def test_actual_transactions_price_each_split(ledger) -> None:
    """Instantaneous series should hold one price per exchange."""
    use_case, _ = _use_case(ledger)

    result = use_case.execute(
        [ledger.acme, ledger.usd],
        ledger.eur,
        source=PriceSource.ACTUAL_TRANSACTIONS,
    )

    assert [point.price for point in result.prices[ledger.acme]] == [
        Decimal("150"),
        Decimal("160"),
        Decimal("160"),
    ]
    assert [point.price for point in result.prices[ledger.usd]] == [
        Decimal("0.9")
    ]


def test_progress_is_reported_per_commodity(ledger) -> None:
    """Progress should advance across the requested span."""
    progress = MagicMock()
    use_case, _ = _use_case(ledger, progress=progress)

    use_case.execute(
        [ledger.acme, ledger.usd],
        ledger.eur,
        start_percent=20.0,
        delta_percent=60.0,
    )

    reported = [
        call.args[0] for call in progress.report_fraction_done.call_args_list
    ]
    assert reported == [50.0, 80.0]
