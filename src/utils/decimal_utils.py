"""Helpers for Decimal normalization and rounding."""

from decimal import ROUND_HALF_UP, Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_sigfigs(value: Decimal, digits: int) -> Decimal:
    """Round a value to a number of significant figures, half-up.

    Args:
        value: Value to round.
        digits: Number of significant figures to keep.

    Returns:
        Decimal: Rounded value.
    """
    if not value:
        return Decimal("0")
    exponent = value.adjusted() - digits + 1
    return value.quantize(Decimal(1).scaleb(exponent), rounding=ROUND_HALF_UP)


def round_to_fraction(value: Decimal, fraction: int) -> Decimal:
    """Round a value to the smallest unit of a commodity.

    Args:
        value: Value to round.
        fraction: Number of smallest units per whole unit (e.g. 100).

    Returns:
        Decimal: Value rounded half-up to a multiple of 1/fraction.
    """
    if fraction <= 0:
        return value
    units = (value * fraction).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return units / Decimal(fraction)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide two values, returning zero for a zero denominator."""
    if not denominator:
        return Decimal("0")
    return numerator / denominator


__all__ = [
    "coerce_decimal",
    "round_sigfigs",
    "round_to_fraction",
    "safe_divide",
]
