"""CLI adapter printing the rate of every traded commodity."""

from datetime import datetime
from decimal import Decimal
import os

from src.domain.models import Commodity, DiagnosticLog, Monetary
from src.infrastructure.container import (
    build_database_adapter,
    build_exchange_strategy_resolver,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import GnuCashSettings
from src.utils.decimal_utils import round_sigfigs

RATE_DIGITS = 12


def _parse_datetime(value: str | None, logger) -> datetime | None:
    """Parse an ISO date or datetime string.

    Args:
        value: Date string in YYYY-MM-DD or ISO datetime format.
        logger: Logger used for warnings.

    Returns:
        datetime | None: Parsed datetime or None when invalid.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None
    if len(value) == 10:
        # A bare date includes the whole day.
        return parsed.replace(hour=23, minute=59, second=59)
    return parsed


def main() -> None:
    """Print one unit of each traded commodity in the report currency."""
    logger = get_app_logger()
    settings = GnuCashSettings.from_env()
    end_date = _parse_datetime(os.getenv("RATES_END_DATE"), logger)
    report_commodity = Commodity("CURRENCY", settings.report_currency)

    try:
        resolver = build_exchange_strategy_resolver(
            build_database_adapter(),
            settings,
        )
    except (RuntimeError, ValueError) as exc:
        logger.error(str(exc))
        return

    diagnostics = DiagnosticLog(logger)
    splits = resolver.snapshot(end_date)
    exchange_fn = resolver.exchange_fn(
        settings.price_source,
        report_commodity,
        end_date=end_date,
        diagnostics=diagnostics,
        splits=splits,
    )
    commodities = resolver.traded_commodities(
        end_date, report_commodity, splits=splits
    )
    # Fraction 0 disables rounding to the currency unit.
    rate_unit = Commodity(
        report_commodity.namespace, report_commodity.mnemonic, fraction=0
    )

    print(
        "Exchange rates "
        f"(report={report_commodity}, source={settings.price_source}, "
        f"end={end_date})"
    )
    for commodity in sorted(commodities, key=lambda c: c.key):
        converted = exchange_fn(Monetary(commodity, Decimal("1")), rate_unit)
        amount = (
            f"{round_sigfigs(converted.amount, RATE_DIGITS).normalize():f}"
            if converted is not None
            else "n/a"
        )
        print(f"1 {commodity.mnemonic} = {amount} {report_commodity.mnemonic}")
    print(f"Diagnostics: {len(diagnostics)}")


if __name__ == "__main__":  # pragma: no cover
    main()
