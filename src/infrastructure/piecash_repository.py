"""PieCash-backed access to GnuCash splits and prices."""

from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from src.application.ports.price_database import PriceDatabasePort
from src.application.ports.split_feed import SplitFeedPort
from src.domain.models import Commodity, PricePoint, SplitRow
from src.domain.services.price_lookup import find_nearest_price
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.piecash_compat import load_piecash, open_piecash_book
from src.utils.decimal_utils import coerce_decimal

VOID_RECONCILE_STATE = "v"


class _PieCashBookReader:
    """Shared book handling for the piecash adapters."""

    def __init__(self, book_path: Path | str, logger=None) -> None:
        """Initialize the reader.

        Args:
            book_path: Path or URI to the GnuCash book supported by piecash.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        try:
            self._piecash = load_piecash()
        except ImportError as exc:
            raise RuntimeError(
                "piecash is not installed; install it to use the piecash backend"
            ) from exc
        self._book_path = book_path
        self._logger = logger or get_app_logger()
        self._commodities: dict[str, Commodity] = {}

    @contextmanager
    def _open_book(self):
        book = open_piecash_book(self._piecash, self._book_path)
        try:
            yield book
        finally:
            close_method = getattr(book, "close", None)
            if callable(close_method):
                close_method()

    def _to_commodity(self, raw) -> Commodity:
        guid = getattr(raw, "guid", None)
        cached = self._commodities.get(guid) if guid else None
        if cached is not None:
            return cached
        commodity = Commodity(
            namespace=str(raw.namespace),
            mnemonic=str(raw.mnemonic),
            fraction=int(getattr(raw, "fraction", None) or 100),
            guid=guid,
            fullname=getattr(raw, "fullname", None),
        )
        if guid:
            self._commodities[guid] = commodity
        return commodity

    @staticmethod
    def _coerce_datetime(raw_value) -> datetime | None:
        if raw_value is None:
            return None
        if isinstance(raw_value, datetime):
            return raw_value.replace(tzinfo=None)
        if isinstance(raw_value, date):
            return datetime(raw_value.year, raw_value.month, raw_value.day)
        return None

    @staticmethod
    def _numeric_to_decimal(value) -> Decimal:
        if value is None:
            return Decimal("0")
        if hasattr(value, "numerator") and hasattr(value, "denominator"):
            denom = coerce_decimal(value.denominator)
            if denom == 0:
                return Decimal("0")
            return coerce_decimal(value.numerator) / denom
        return coerce_decimal(value)

    @staticmethod
    def _account_type(account) -> str:
        raw_type = getattr(account, "type", None)
        if raw_type is None:
            return ""
        return str(getattr(raw_type, "name", raw_type)).upper()


class PieCashSplitFeed(_PieCashBookReader, SplitFeedPort):
    """Split snapshot read from a piecash book."""

    def fetch_splits(
        self,
        account_guids: set[str] | None = None,
        end_date: datetime | None = None,
    ) -> list[SplitRow]:
        rows: list[SplitRow] = []
        with self._open_book() as book:
            for split in book.splits:
                if getattr(split, "reconcile_state", "") == VOID_RECONCILE_STATE:
                    continue
                account = split.account
                if account_guids and account.guid not in account_guids:
                    continue
                transaction = split.transaction
                post_date = self._coerce_datetime(
                    getattr(transaction, "post_date", None)
                )
                if post_date is None:
                    self._logger.warning(
                        f"Skipping split {getattr(split, 'guid', '?')} "
                        "without post date"
                    )
                    continue
                if end_date and post_date > end_date:
                    continue
                rows.append(
                    SplitRow(
                        transaction_commodity=self._to_commodity(
                            transaction.currency
                        ),
                        account_commodity=self._to_commodity(account.commodity),
                        amount=self._numeric_to_decimal(split.quantity),
                        value=self._numeric_to_decimal(split.value),
                        post_date=post_date,
                        account_type=self._account_type(account),
                        account_guid=account.guid,
                        split_guid=getattr(split, "guid", None),
                    )
                )
        return sorted(rows, key=lambda row: row.post_date)


class PieCashPriceDatabase(_PieCashBookReader, PriceDatabasePort):
    """Price database read from the prices of a piecash book."""

    def latest_price(
        self,
        foreign: Commodity,
        domestic: Commodity,
    ) -> Decimal | None:
        points, inverted = self._price_points(foreign, domestic)
        if not points:
            return None
        price = points[-1].price
        return 1 / price if inverted else price

    def nearest_price(
        self,
        foreign: Commodity,
        domestic: Commodity,
        when: datetime,
    ) -> Decimal | None:
        points, inverted = self._price_points(foreign, domestic)
        price = find_nearest_price(points, when)
        if not price:
            return None
        return 1 / price if inverted else price

    def _price_points(
        self,
        foreign: Commodity,
        domestic: Commodity,
    ) -> tuple[list[PricePoint], bool]:
        direct: list[PricePoint] = []
        reverse: list[PricePoint] = []
        with self._open_book() as book:
            for price in book.prices:
                commodity = self._to_commodity(price.commodity)
                currency = self._to_commodity(price.currency)
                point = PricePoint(
                    self._coerce_datetime(price.date),
                    self._numeric_to_decimal(price.value),
                )
                if not point.price or point.date is None:
                    continue
                if commodity.equiv(foreign) and currency.equiv(domestic):
                    direct.append(point)
                elif commodity.equiv(domestic) and currency.equiv(foreign):
                    reverse.append(point)
        if direct:
            return sorted(direct, key=lambda point: point.date), False
        return sorted(reverse, key=lambda point: point.date), True


__all__ = ["PieCashSplitFeed", "PieCashPriceDatabase"]
