"""Selectable sources of exchange rates."""

from enum import Enum

from src.domain.models.diagnostics import DiagnosticKind, DiagnosticLog


class PriceSource(str, Enum):
    """Where report conversions take their rates from.

    AVERAGE_COST: signed totals of all exchanges up to the report date.
    WEIGHTED_AVERAGE: absolute totals of all exchanges up to the report date.
    ACTUAL_TRANSACTIONS: price of the individual exchange closest in time.
    PRICEDB_LATEST: latest quote in the price database.
    PRICEDB_NEAREST: price database quote closest to the report date.
    """

    AVERAGE_COST = "average-cost"
    WEIGHTED_AVERAGE = "weighted-average"
    ACTUAL_TRANSACTIONS = "actual-transactions"
    PRICEDB_LATEST = "pricedb-latest"
    PRICEDB_NEAREST = "pricedb-nearest"

    @classmethod
    def parse(
        cls,
        raw: "str | PriceSource | None",
        diagnostics: DiagnosticLog | None = None,
    ) -> "PriceSource":
        """Parse a configured value, falling back to PRICEDB_NEAREST.

        Args:
            raw: Enum member or configuration string (case-insensitive,
                underscores accepted for dashes).
            diagnostics: Optional log receiving UNSUPPORTED_STRATEGY.

        Returns:
            PriceSource: Parsed source.
        """
        if isinstance(raw, cls):
            return raw
        cleaned = (raw or "").strip().lower().replace("_", "-")
        for member in cls:
            if member.value == cleaned:
                return member
        if diagnostics is not None:
            diagnostics.record(
                DiagnosticKind.UNSUPPORTED_STRATEGY,
                f"Unsupported price source '{raw}', using pricedb-nearest",
                source=raw,
            )
        return cls.PRICEDB_NEAREST


__all__ = ["PriceSource"]
