"""Application port for reading ledger splits."""

from datetime import datetime
from typing import Protocol

from src.domain.models import SplitRow


class SplitFeedPort(Protocol):
    """Port exposing a read-only snapshot of ledger splits."""

    def fetch_splits(
        self,
        account_guids: set[str] | None = None,
        end_date: datetime | None = None,
    ) -> list[SplitRow]:
        """Return non-void splits posted at or before ``end_date``.

        Args:
            account_guids: Optional accounts to restrict the snapshot to.
            end_date: Optional inclusive upper bound for post dates.

        Returns:
            list[SplitRow]: Splits ordered by post date.
        """


__all__ = ["SplitFeedPort"]
