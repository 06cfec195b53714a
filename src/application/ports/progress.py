"""Application port for progress reporting."""

from typing import Protocol


class ProgressSinkPort(Protocol):
    """Port receiving percent-done updates from long computations."""

    def report_fraction_done(self, percent: float) -> None:
        """Record that ``percent`` of the work is done."""


__all__ = ["ProgressSinkPort"]
