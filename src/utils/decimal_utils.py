"""Helpers for Decimal normalization."""

from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Booleans, non-numeric strings, NaN and infinities collapse to zero so
    malformed JSON values never poison a running total.

    Args:
        value: Raw numeric value from a JSON document or adapter.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def to_percent(ratio: Decimal) -> Decimal:
    """Convert a fractional ratio (0.05) into a percentage (5)."""
    return ratio * HUNDRED


__all__ = ["ZERO", "HUNDRED", "coerce_decimal", "to_percent"]
