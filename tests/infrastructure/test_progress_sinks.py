"""Tests for progress sinks."""

from unittest.mock import MagicMock

from src.infrastructure.progress import LoggingProgressSink, NullProgressSink


def test_logging_sink_formats_percent() -> None:
    """Progress should be logged with one decimal."""
    logger = MagicMock()

    LoggingProgressSink(logger=logger, label="prices").report_fraction_done(42.26)

    logger.info.assert_called_once_with("prices: 42.3% done")


def test_null_sink_accepts_updates() -> None:
    """The null sink should ignore updates."""
    assert NullProgressSink().report_fraction_done(10.0) is None
