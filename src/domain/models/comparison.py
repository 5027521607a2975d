"""Month-over-month comparison records."""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from src.domain.models.keys import AssetKey


class AssetStatus(str, Enum):
    """Lifecycle of an asset between two months."""

    NEW = "new"
    GHOST = "ghost"
    HIDDEN = "hidden"
    NORMAL = "normal"


@dataclass(frozen=True)
class DeltaRecord:
    """Change between an adjusted start value and the current value.

    Attributes:
        delta: current_val minus adjusted_start.
        percent: delta relative to adjusted_start, in percent.
        adjusted_start: previous_val plus the net transfer adjustment.
        previous_val: Value in the previous month.
        current_val: Value in the current month.
    """

    delta: Decimal
    percent: Decimal
    adjusted_start: Decimal
    previous_val: Decimal
    current_val: Decimal


@dataclass(frozen=True)
class AssetComparison:
    """Delta record of a single asset with its status."""

    record: DeltaRecord
    status: AssetStatus
    category_id: str
    source: str
    name: str


@dataclass(frozen=True)
class SnapshotComparison:
    """Deltas at asset, category and portfolio level."""

    portfolio: DeltaRecord
    categories: Mapping[str, DeltaRecord]
    assets: Mapping[AssetKey, AssetComparison]

    def assets_with_status(self, status: AssetStatus) -> list[AssetKey]:
        """Return the keys of assets classified with ``status``."""
        return [
            key
            for key, comparison in self.assets.items()
            if comparison.status is status
        ]


__all__ = [
    "AssetStatus",
    "DeltaRecord",
    "AssetComparison",
    "SnapshotComparison",
]
