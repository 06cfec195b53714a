"""Progress sinks for long price computations."""

from src.application.ports.progress import ProgressSinkPort
from src.infrastructure.logging.logger import get_usage_logger


class NullProgressSink(ProgressSinkPort):
    """Sink that ignores progress updates."""

    def report_fraction_done(self, percent: float) -> None:
        return None


class LoggingProgressSink(ProgressSinkPort):
    """Sink writing progress updates to the usage logger."""

    def __init__(self, logger=None, label: str = "pricing") -> None:
        self._logger = logger or get_usage_logger()
        self._label = label

    def report_fraction_done(self, percent: float) -> None:
        self._logger.info(f"{self._label}: {percent:.1f}% done")


__all__ = ["NullProgressSink", "LoggingProgressSink"]
