"""Domain models package."""

from .comparison import (
    AssetComparison,
    AssetStatus,
    DeltaRecord,
    SnapshotComparison,
)
from .keys import AssetKey
from .performance import (
    AssetAdjustment,
    MonthData,
    MonthPerformance,
    YearForecast,
)
from .portfolio import AssetEntry, Category, CategoryInfo, PortfolioDocument
from .snapshot import AssetRecord, CategorySnapshot, PortfolioSnapshot
from .transfers import Deposit, Move, Transfer, TransferBatch, Withdraw

__all__ = [
    "AssetAdjustment",
    "AssetComparison",
    "AssetEntry",
    "AssetKey",
    "AssetRecord",
    "AssetStatus",
    "Category",
    "CategoryInfo",
    "CategorySnapshot",
    "DeltaRecord",
    "Deposit",
    "MonthData",
    "MonthPerformance",
    "Move",
    "PortfolioDocument",
    "PortfolioSnapshot",
    "SnapshotComparison",
    "Transfer",
    "TransferBatch",
    "Withdraw",
    "YearForecast",
]
