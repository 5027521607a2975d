"""Month-over-month comparison of portfolio snapshots."""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType

from src.domain.models import (
    AssetAdjustment,
    AssetComparison,
    AssetKey,
    AssetStatus,
    DeltaRecord,
    PortfolioSnapshot,
    SnapshotComparison,
)
from src.domain.services.normalization import normalize_key_part
from src.utils.decimal_utils import HUNDRED, ZERO


def calculate_delta(
    current_val: Decimal,
    previous_val: Decimal,
    adjustment: Decimal = ZERO,
) -> DeltaRecord:
    """Return the change against the transfer-adjusted start value.

    A position funded only by this month's deposits has an adjusted start
    equal to the deposit, so it reports 0% instead of infinite growth.

    Args:
        current_val: Value this month.
        previous_val: Value last month.
        adjustment: Net deposits minus withdraws for the period.

    Returns:
        DeltaRecord: Delta, percent and the values used.
    """
    adjusted_start = previous_val + adjustment
    delta = current_val - adjusted_start
    percent = delta / adjusted_start * HUNDRED if adjusted_start > 0 else ZERO
    return DeltaRecord(
        delta=delta,
        percent=percent,
        adjusted_start=adjusted_start,
        previous_val=previous_val,
        current_val=current_val,
    )


def classify_status(
    current_val: Decimal,
    previous_exists: bool,
    previous_val: Decimal,
) -> AssetStatus:
    """Classify an asset as new, ghost, hidden or normal, in that order."""
    if current_val > 0 and not previous_exists:
        return AssetStatus.NEW
    if current_val == 0 and previous_val > 0:
        return AssetStatus.GHOST
    if current_val == 0 and previous_val == 0:
        return AssetStatus.HIDDEN
    return AssetStatus.NORMAL


def compare_snapshots(
    current: PortfolioSnapshot,
    previous: PortfolioSnapshot | None,
    adjustments: Mapping[AssetKey, AssetAdjustment] | None = None,
) -> SnapshotComparison:
    """Diff two snapshots at asset, category and portfolio level.

    Category adjustments sum the nets of every adjusted asset whose key
    belongs to the category, matched on the key's category part.

    Args:
        current: Snapshot of the selected month.
        previous: Snapshot of the preceding month, if any.
        adjustments: Per-asset transfer adjustments of the selected month.

    Returns:
        SnapshotComparison: Delta records for every key in either snapshot.
    """
    adjustments = adjustments or {}
    previous = previous or PortfolioSnapshot.empty()

    asset_keys = list(current.asset_map)
    asset_keys += [
        key for key in previous.asset_map if key not in current.asset_map
    ]

    assets: dict[AssetKey, AssetComparison] = {}
    for key in asset_keys:
        current_record = current.asset_map.get(key)
        previous_record = previous.asset_map.get(key)
        current_val = current_record.val if current_record else ZERO
        previous_val = previous_record.val if previous_record else ZERO
        adjustment = adjustments.get(key)
        record = calculate_delta(
            current_val,
            previous_val,
            adjustment.net if adjustment else ZERO,
        )
        reference = current_record or previous_record
        assets[key] = AssetComparison(
            record=record,
            status=classify_status(
                current_val,
                previous_record is not None,
                previous_val,
            ),
            category_id=reference.category_id,
            source=reference.source,
            name=reference.name,
        )

    category_nets: dict[str, Decimal] = {}
    for key, adjustment in adjustments.items():
        category_nets[key.category_id] = (
            category_nets.get(key.category_id, ZERO) + adjustment.net
        )

    category_ids = list(current.categories)
    category_ids += [
        cid for cid in previous.categories if cid not in current.categories
    ]
    categories: dict[str, DeltaRecord] = {}
    for category_id in category_ids:
        current_category = current.categories.get(category_id)
        previous_category = previous.categories.get(category_id)
        categories[category_id] = calculate_delta(
            current_category.total if current_category else ZERO,
            previous_category.total if previous_category else ZERO,
            category_nets.get(normalize_key_part(category_id), ZERO),
        )

    total_adjustment = sum(
        (adjustment.net for adjustment in adjustments.values()),
        ZERO,
    )
    portfolio = calculate_delta(
        current.total,
        previous.total,
        total_adjustment,
    )

    return SnapshotComparison(
        portfolio=portfolio,
        categories=MappingProxyType(categories),
        assets=MappingProxyType(assets),
    )


__all__ = ["calculate_delta", "classify_status", "compare_snapshots"]
