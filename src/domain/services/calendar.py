"""Month identifiers (``YYYY-MM``) and their labels."""

from src.domain.constants import MONTH_NAMES


def parse_month_id(month_id: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` id into year and month.

    Raises:
        ValueError: If the id is not a valid month.
    """
    year_part, _, month_part = month_id.partition("-")
    year, month = int(year_part), int(month_part)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month id: {month_id}")
    return year, month


def format_month_id(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def month_label(month_id: str) -> str:
    """Return a display label such as ``January 2026``."""
    year, month = parse_month_id(month_id)
    return f"{MONTH_NAMES[month - 1]} {year}"


def year_to_date_months(month_id: str) -> list[str]:
    """Return month ids from January of the same year through month_id."""
    year, month = parse_month_id(month_id)
    return [format_month_id(year, m) for m in range(1, month + 1)]


def months_until_year_end(start_month_id: str) -> list[str]:
    """Return month ids from start_month_id through December."""
    year, month = parse_month_id(start_month_id)
    return [format_month_id(year, m) for m in range(month, 13)]


def previous_month_id(month_id: str, available: list[str]) -> str | None:
    """Return the id preceding month_id among available ids, if any."""
    if month_id not in available:
        return None
    index = available.index(month_id)
    return available[index - 1] if index > 0 else None


__all__ = [
    "parse_month_id",
    "format_month_id",
    "month_label",
    "year_to_date_months",
    "months_until_year_end",
    "previous_month_id",
]
