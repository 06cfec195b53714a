"""Tests for the diagnostics log."""

from src.domain.models import DiagnosticKind, DiagnosticLog


class _Logger:
    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warning(self, msg: str) -> None:
        self.warnings.append(msg)


def test_record_keeps_context_and_mirrors_to_logger() -> None:
    """Recorded entries should be kept and logged as warnings."""
    logger = _Logger()
    diagnostics = DiagnosticLog(logger)

    entry = diagnostics.record(
        DiagnosticKind.NO_PRICE_FOUND,
        "No price for ACME",
        commodity="ACME",
    )

    assert diagnostics.entries == [entry]
    assert entry.context == {"commodity": "ACME"}
    assert logger.warnings == ["No price for ACME"]


def test_of_kind_filters_entries() -> None:
    """Entries should be filterable by kind."""
    diagnostics = DiagnosticLog()
    diagnostics.record(DiagnosticKind.AMBIGUOUS_RATE, "ambiguous")
    diagnostics.record(DiagnosticKind.UNRESOLVABLE_RATE, "unresolvable")

    assert [d.message for d in diagnostics.of_kind(DiagnosticKind.AMBIGUOUS_RATE)] == [
        "ambiguous"
    ]
    assert len(diagnostics) == 2
    assert [d.kind for d in diagnostics] == [
        DiagnosticKind.AMBIGUOUS_RATE,
        DiagnosticKind.UNRESOLVABLE_RATE,
    ]
