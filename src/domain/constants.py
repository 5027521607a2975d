"""Domain constants for portfolio analytics."""

from decimal import Decimal

ASSET_KEY_SEPARATOR = "_"

DEFAULT_CATEGORY_COLOR = "#cbd5e0"
FALLBACK_CATEGORY_COLOR = "#a0aec0"

# Invested capital below this threshold is treated as zero.
MIN_INVESTED_CAPITAL = Decimal("0.01")
# Yield reported when profit appears on zero capital (e.g. airdrops).
ZERO_CAPITAL_YIELD_PERCENT = Decimal("100")
ZERO_CAPITAL_YIELD_RATIO = Decimal("1")

MONTHS_PER_YEAR = 12

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


__all__ = [
    "ASSET_KEY_SEPARATOR",
    "DEFAULT_CATEGORY_COLOR",
    "FALLBACK_CATEGORY_COLOR",
    "MIN_INVESTED_CAPITAL",
    "ZERO_CAPITAL_YIELD_PERCENT",
    "ZERO_CAPITAL_YIELD_RATIO",
    "MONTHS_PER_YEAR",
    "MONTH_NAMES",
]
