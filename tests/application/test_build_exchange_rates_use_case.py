"""Tests for the BuildExchangeRatesUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from src.application.use_cases.build_exchange_rates import (
    BuildExchangeRatesUseCase,
)
from src.domain.models import DiagnosticKind, PriceSource


def _use_case(splits) -> tuple[BuildExchangeRatesUseCase, MagicMock]:
    split_feed = MagicMock()
    split_feed.fetch_splits.return_value = splits
    return BuildExchangeRatesUseCase(split_feed, logger=MagicMock()), split_feed


def test_average_cost_nets_sales_against_purchases(ledger) -> None:
    """Average cost should use signed totals without trading splits."""
    use_case, split_feed = _use_case(ledger.splits)

    result = use_case.execute(ledger.eur, end_date=ledger.day10)

    assert result.rates[ledger.acme] == Decimal("140")
    assert result.rates[ledger.usd] == Decimal("0.9")
    split_feed.fetch_splits.assert_called_once_with(None, ledger.day10)


def test_weighted_average_uses_absolute_totals(ledger) -> None:
    """Weighted average should add sales and trading legs as volume."""
    use_case, _ = _use_case(ledger.splits)

    result = use_case.execute(ledger.eur, source=PriceSource.WEIGHTED_AVERAGE)

    assert result.rates[ledger.acme] == Decimal("3100") / Decimal("20")
    assert result.rates[ledger.usd] == Decimal("0.9")


def test_account_filter_is_forwarded(ledger) -> None:
    """Account GUIDs should restrict the snapshot."""
    use_case, split_feed = _use_case([])

    result = use_case.execute(ledger.eur, account_guids={"acct-1"})

    split_feed.fetch_splits.assert_called_once_with({"acct-1"}, None)
    assert len(result.rates) == 0
    assert result.report_commodity is ledger.eur


def test_unknown_source_is_reported_and_uses_cost_totals(ledger) -> None:
    """An unknown configured source should be recorded as a diagnostic."""
    use_case, _ = _use_case(ledger.splits)

    result = use_case.execute(ledger.eur, source="bogus")

    assert result.rates[ledger.acme] == Decimal("140")
    assert len(
        result.diagnostics.of_kind(DiagnosticKind.UNSUPPORTED_STRATEGY)
    ) == 1
