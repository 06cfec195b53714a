"""Shared ledger snapshot for application tests."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from src.domain.models import Commodity, SplitRow


def _split(txn, account, amount, value, when, account_type="STOCK"):
    return SplitRow(
        transaction_commodity=txn,
        account_commodity=account,
        amount=Decimal(amount),
        value=Decimal(value),
        post_date=when,
        account_type=account_type,
    )


@pytest.fixture
def ledger() -> SimpleNamespace:
    """Buy 10 ACME for 1500, sell 5 for 800, swap 90 EUR for 100 USD."""
    eur = Commodity("CURRENCY", "EUR")
    usd = Commodity("CURRENCY", "USD")
    acme = Commodity("NASDAQ", "ACME", fraction=10000)
    day1 = datetime(2024, 1, 1)
    day5 = datetime(2024, 1, 5)
    splits = [
        _split(eur, acme, "10", "1500", day1),
        _split(eur, eur, "-1500", "-1500", day1, account_type="BANK"),
        _split(eur, usd, "100", "90", day1, account_type="BANK"),
        _split(eur, acme, "-5", "-800", day5),
        _split(eur, acme, "5", "800", day5, account_type="TRADING"),
    ]
    return SimpleNamespace(
        eur=eur,
        usd=usd,
        acme=acme,
        day1=day1,
        day5=day5,
        day10=datetime(2024, 1, 10),
        splits=splits,
    )
