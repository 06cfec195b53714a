"""Structured diagnostics for recoverable rate computation problems."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DiagnosticKind(str, Enum):
    """Recoverable conditions raised while computing rates."""

    UNRESOLVABLE_RATE = "unresolvable-rate"
    AMBIGUOUS_RATE = "ambiguous-rate"
    NO_PRICE_FOUND = "no-price-found"
    UNSUPPORTED_STRATEGY = "unsupported-strategy"
    UNCONVERTIBLE_COMMODITY = "unconvertible-commodity"


@dataclass(frozen=True)
class Diagnostic:
    """One recorded condition with its context."""

    kind: DiagnosticKind
    message: str
    context: dict[str, Any] = field(default_factory=dict)


class DiagnosticLog:
    """Collects diagnostics and mirrors them to a logger as warnings."""

    def __init__(self, logger=None) -> None:
        """Initialize the log.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._logger = logger
        self._entries: list[Diagnostic] = []

    def record(
        self,
        kind: DiagnosticKind,
        message: str,
        **context: Any,
    ) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, message=message, context=context)
        self._entries.append(diagnostic)
        if self._logger is not None:
            self._logger.warning(message)
        return diagnostic

    def of_kind(self, kind: DiagnosticKind) -> list[Diagnostic]:
        return [entry for entry in self._entries if entry.kind == kind]

    @property
    def entries(self) -> list[Diagnostic]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(list(self._entries))


__all__ = ["DiagnosticKind", "Diagnostic", "DiagnosticLog"]
