"""Snapshot builder for monthly portfolio documents."""

from decimal import Decimal
from types import MappingProxyType

from src.domain.models import (
    AssetKey,
    AssetRecord,
    CategorySnapshot,
    PortfolioDocument,
    PortfolioSnapshot,
)
from src.domain.services.normalization import build_asset_key
from src.utils.decimal_utils import ZERO


def build_snapshot(document: PortfolioDocument | None) -> PortfolioSnapshot:
    """Normalize a portfolio document into totals and an asset map.

    Category totals sum every entry; when two entries share a key the
    later one wins in the asset maps. Categories repeating an id are folded
    into one, keeping the first title and color.

    Args:
        document: Raw or merged document; None for absent/malformed ones.

    Returns:
        PortfolioSnapshot: Read-only snapshot, all-zero when document is None.
    """
    if document is None:
        return PortfolioSnapshot.empty()

    total = ZERO
    categories: dict[str, CategorySnapshot] = {}
    asset_map: dict[AssetKey, AssetRecord] = {}

    for category in document.categories:
        existing = categories.get(category.id)
        category_total = existing.total if existing else ZERO
        items: dict[AssetKey, AssetRecord] = (
            dict(existing.items) if existing else {}
        )
        for entry in category.items:
            key = build_asset_key(category.id, entry.source, entry.name)
            record = AssetRecord(
                key=key,
                category_id=category.id,
                source=entry.source,
                name=entry.name,
                val=entry.val,
                original_val=(
                    entry.original_val
                    if entry.original_val is not None
                    else entry.val
                ),
                is_virtual=entry.is_virtual,
                adjustment=entry.adjustment,
                adjustment_history=entry.adjustment_history,
            )
            items[key] = record
            asset_map[key] = record
            category_total += entry.val
            total += entry.val

        # Repeated ids fold into the first occurrence.
        categories[category.id] = CategorySnapshot(
            id=category.id,
            title=existing.title if existing else category.title,
            color=existing.color if existing else category.color,
            total=category_total,
            items=MappingProxyType(items),
        )

    return PortfolioSnapshot(
        total=total,
        categories=MappingProxyType(categories),
        asset_map=MappingProxyType(asset_map),
    )


def calculate_total_balance(document: PortfolioDocument | None) -> Decimal:
    """Return the sum of every asset value in the document."""
    if document is None:
        return ZERO
    return sum(
        (entry.val for category in document.categories
         for entry in category.items),
        ZERO,
    )


__all__ = ["build_snapshot", "calculate_total_balance"]
