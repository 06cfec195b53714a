"""Domain models for GnuCash row data."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.models.commodities import Commodity

TRADING_ACCOUNT_TYPE = "TRADING"


@dataclass(frozen=True)
class SplitRow:
    """One leg of a transaction, as read from the ledger.

    Attributes:
        transaction_commodity: Currency of the parent transaction.
        account_commodity: Commodity of the owning account.
        amount: Signed quantity in the account commodity.
        value: Signed quantity in the transaction commodity.
        post_date: Posting timestamp of the parent transaction.
        account_type: GnuCash account type (BANK, STOCK, TRADING, ...).
        account_guid: Optional GUID of the owning account.
        split_guid: Optional GUID of the split.
    """

    transaction_commodity: Commodity
    account_commodity: Commodity
    amount: Decimal
    value: Decimal
    post_date: datetime
    account_type: str = ""
    account_guid: str | None = None
    split_guid: str | None = None

    @property
    def is_cross_commodity(self) -> bool:
        """True when the split exchanges two different commodities."""
        return not self.transaction_commodity.equiv(self.account_commodity)

    @property
    def is_trading(self) -> bool:
        return self.account_type.strip().upper() == TRADING_ACCOUNT_TYPE


@dataclass(frozen=True)
class PriceRow:
    """Row representing a commodity price."""

    commodity: Commodity
    currency: Commodity
    value: Decimal
    date: datetime


__all__ = ["TRADING_ACCOUNT_TYPE", "SplitRow", "PriceRow"]
