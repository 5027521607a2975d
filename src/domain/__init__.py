"""Domain package for portfolio computations and core models."""

from .constants import DEFAULT_CATEGORY_COLOR, MIN_INVESTED_CAPITAL
from .models import (
    AssetKey,
    AssetStatus,
    MonthPerformance,
    PortfolioDocument,
    PortfolioSnapshot,
    SnapshotComparison,
    YearForecast,
)
from .services import (
    aggregate_adjustments,
    build_snapshot,
    build_year_forecast,
    calculate_performance,
    compare_snapshots,
    merge_transfers,
)

__all__ = [
    "AssetKey",
    "AssetStatus",
    "MonthPerformance",
    "PortfolioDocument",
    "PortfolioSnapshot",
    "SnapshotComparison",
    "YearForecast",
    "DEFAULT_CATEGORY_COLOR",
    "MIN_INVESTED_CAPITAL",
    "aggregate_adjustments",
    "build_snapshot",
    "build_year_forecast",
    "calculate_performance",
    "compare_snapshots",
    "merge_transfers",
]
