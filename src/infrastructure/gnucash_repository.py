"""SQLAlchemy-backed access to GnuCash splits and prices."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import bindparam, text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.price_database import PriceDatabasePort
from src.application.ports.split_feed import SplitFeedPort
from src.domain.models import Commodity, PricePoint, SplitRow
from src.domain.services.price_lookup import find_nearest_price
from src.utils.decimal_utils import coerce_decimal


def _to_decimal(num, denom) -> Decimal:
    denominator = coerce_decimal(denom)
    if denominator == 0:
        return Decimal("0")
    return coerce_decimal(num) / denominator


def _to_datetime(raw_value) -> datetime | None:
    if raw_value is None:
        return None
    if isinstance(raw_value, datetime):
        return raw_value
    if isinstance(raw_value, date):
        return datetime(raw_value.year, raw_value.month, raw_value.day)
    return datetime.fromisoformat(str(raw_value))


class SqlAlchemySplitFeed(SplitFeedPort):
    """Split snapshot read from a GnuCash SQL database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the feed.

        Args:
            db_port: Port providing access to the GnuCash engine.
        """
        self._db_port = db_port

    def fetch_splits(
        self,
        account_guids: set[str] | None = None,
        end_date: datetime | None = None,
    ) -> list[SplitRow]:
        query = self._build_splits_query(account_guids, end_date)
        params: dict = {}
        if account_guids:
            params["account_guids"] = sorted(account_guids)
        if end_date:
            params["end_date"] = end_date
        engine = self._db_port.get_gnucash_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()

        commodities: dict[str, Commodity] = {}
        splits = []
        for row in rows:
            splits.append(
                SplitRow(
                    transaction_commodity=self._commodity(
                        commodities,
                        row.txn_commodity_guid,
                        row.txn_namespace,
                        row.txn_mnemonic,
                        row.txn_fraction,
                    ),
                    account_commodity=self._commodity(
                        commodities,
                        row.account_commodity_guid,
                        row.account_namespace,
                        row.account_mnemonic,
                        row.account_fraction,
                    ),
                    amount=_to_decimal(row.quantity_num, row.quantity_denom),
                    value=_to_decimal(row.value_num, row.value_denom),
                    post_date=_to_datetime(row.post_date),
                    account_type=row.account_type or "",
                    account_guid=row.account_guid,
                    split_guid=row.split_guid,
                )
            )
        return splits

    @staticmethod
    def _commodity(
        cache: dict[str, Commodity],
        guid: str,
        namespace: str,
        mnemonic: str,
        fraction,
    ) -> Commodity:
        commodity = cache.get(guid)
        if commodity is None:
            commodity = Commodity(
                namespace=namespace,
                mnemonic=mnemonic,
                fraction=int(fraction or 100),
                guid=guid,
            )
            cache[guid] = commodity
        return commodity

    @staticmethod
    def _build_splits_query(
        account_guids: set[str] | None,
        end_date: datetime | None,
    ):
        base_sql = """
        SELECT s.guid AS split_guid,
               s.account_guid AS account_guid,
               a.account_type AS account_type,
               ac.guid AS account_commodity_guid,
               ac.namespace AS account_namespace,
               ac.mnemonic AS account_mnemonic,
               ac.fraction AS account_fraction,
               tc.guid AS txn_commodity_guid,
               tc.namespace AS txn_namespace,
               tc.mnemonic AS txn_mnemonic,
               tc.fraction AS txn_fraction,
               s.value_num, s.value_denom,
               s.quantity_num, s.quantity_denom,
               t.post_date AS post_date
        FROM splits s
        JOIN transactions t ON t.guid = s.tx_guid
        JOIN accounts a ON a.guid = s.account_guid
        JOIN commodities ac ON ac.guid = a.commodity_guid
        JOIN commodities tc ON tc.guid = t.currency_guid
        WHERE s.reconcile_state <> 'v'
        """
        if account_guids:
            base_sql += " AND s.account_guid IN :account_guids"
        if end_date:
            base_sql += " AND t.post_date <= :end_date"
        base_sql += " ORDER BY t.post_date, t.guid, s.guid"
        query = text(base_sql)
        if account_guids:
            query = query.bindparams(
                bindparam("account_guids", expanding=True)
            )
        return query


class SqlAlchemyPriceDatabase(PriceDatabasePort):
    """Price database read from the GnuCash ``prices`` table.

    Quotes are looked up for the requested pair first, then inverted from
    the reverse pair.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the price database.

        Args:
            db_port: Port providing access to the GnuCash engine.
        """
        self._db_port = db_port

    def latest_price(
        self,
        foreign: Commodity,
        domestic: Commodity,
    ) -> Decimal | None:
        points = self._fetch_points(foreign, domestic)
        if points:
            return points[-1].price
        inverse = self._fetch_points(domestic, foreign)
        if inverse:
            return 1 / inverse[-1].price
        return None

    def nearest_price(
        self,
        foreign: Commodity,
        domestic: Commodity,
        when: datetime,
    ) -> Decimal | None:
        points = self._fetch_points(foreign, domestic)
        if points:
            return find_nearest_price(points, when)
        inverse = self._fetch_points(domestic, foreign)
        if inverse:
            price = find_nearest_price(inverse, when)
            return 1 / price if price else None
        return None

    def _fetch_points(
        self,
        commodity: Commodity,
        currency: Commodity,
    ) -> list[PricePoint]:
        query = text(
            """
            SELECT p.value_num, p.value_denom, p.date
            FROM prices p
            JOIN commodities c ON c.guid = p.commodity_guid
            JOIN commodities cur ON cur.guid = p.currency_guid
            WHERE c.namespace = :namespace AND c.mnemonic = :mnemonic
              AND cur.namespace = :currency_namespace
              AND cur.mnemonic = :currency_mnemonic
            ORDER BY p.date
            """
        )
        params = {
            "namespace": commodity.namespace,
            "mnemonic": commodity.mnemonic,
            "currency_namespace": currency.namespace,
            "currency_mnemonic": currency.mnemonic,
        }
        engine = self._db_port.get_gnucash_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        points = [
            PricePoint(
                _to_datetime(row.date),
                _to_decimal(row.value_num, row.value_denom),
            )
            for row in rows
        ]
        return [point for point in points if point.price]


__all__ = ["SqlAlchemySplitFeed", "SqlAlchemyPriceDatabase"]
