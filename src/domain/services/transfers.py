"""Transfer merging and per-asset adjustment aggregation."""

from collections.abc import Iterable, Sequence
from dataclasses import replace
from decimal import Decimal
from logging import Logger

from src.domain.constants import DEFAULT_CATEGORY_COLOR
from src.domain.models import (
    AssetAdjustment,
    AssetEntry,
    AssetKey,
    Category,
    Deposit,
    Move,
    PortfolioDocument,
    Transfer,
    Withdraw,
)
from src.domain.services.normalization import build_asset_key
from src.domain.services.validation import validate_asset_balance
from src.utils.decimal_utils import ZERO


def merge_transfers(
    document: PortfolioDocument | None,
    transfers: Sequence[Transfer] | None,
    logger: Logger | None = None,
) -> PortfolioDocument | None:
    """Apply transfers onto a document to obtain virtual balances.

    Transfers are applied in list order. A move is applied as a withdraw on
    its source asset followed by a deposit on its target asset.

    Args:
        document: Source document; never mutated.
        transfers: Ordered transfer records.
        logger: Optional logger used to flag negative virtual balances.

    Returns:
        PortfolioDocument | None: New merged document, or the input itself
        when there is nothing to merge.
    """
    if not transfers or document is None:
        return document

    merged = document
    for transfer in transfers:
        for category_id, source, name, amount in _operations(transfer):
            merged = apply_transfer_operation(
                merged,
                category_id,
                source,
                name,
                amount,
            )

    if logger:
        for category in merged.categories:
            for entry in category.items:
                if entry.is_virtual:
                    validate_asset_balance(category.id, entry, logger)
    return merged


def _operations(
    transfer: Transfer,
) -> list[tuple[str, str, str, Decimal]]:
    if isinstance(transfer, Deposit):
        return [
            (transfer.category, transfer.source, transfer.name,
             transfer.amount),
        ]
    if isinstance(transfer, Withdraw):
        return [
            (transfer.category, transfer.source, transfer.name,
             -transfer.amount),
        ]
    if isinstance(transfer, Move):
        return [
            (transfer.from_category, transfer.from_source, transfer.from_name,
             -transfer.amount),
            (transfer.to_category, transfer.to_source, transfer.to_name,
             transfer.amount),
        ]
    return []


def apply_transfer_operation(
    document: PortfolioDocument,
    category_id: str,
    source: str,
    name: str,
    amount: Decimal,
) -> PortfolioDocument:
    """Apply one signed amount to an asset, creating it when missing.

    Categories match by exact id and assets by exact name and source. A new
    category takes the raw id as title and the default gray color; a new
    asset starts at zero.

    Args:
        document: Document to start from.
        category_id: Target category id.
        source: Target asset source label.
        name: Target asset name.
        amount: Signed amount (positive adds, negative removes).

    Returns:
        PortfolioDocument: Copy of the document with the amount applied.
    """
    categories = list(document.categories)
    index = next(
        (i for i, cat in enumerate(categories) if cat.id == category_id),
        None,
    )
    if index is None:
        categories.append(
            Category(
                id=category_id,
                title=category_id,
                color=DEFAULT_CATEGORY_COLOR,
            )
        )
        index = len(categories) - 1
    category = categories[index]

    items = list(category.items)
    position = next(
        (
            i
            for i, item in enumerate(items)
            if item.name == name and item.source == source
        ),
        None,
    )
    if position is None:
        items.append(AssetEntry(name=name, source=source, val=ZERO))
        position = len(items) - 1
    entry = items[position]

    items[position] = replace(
        entry,
        val=entry.val + amount,
        original_val=(
            entry.original_val
            if entry.original_val is not None
            else entry.val
        ),
        is_virtual=True,
        adjustment=entry.adjustment + amount,
        adjustment_history=entry.adjustment_history + (amount,),
    )
    categories[index] = replace(category, items=tuple(items))
    return replace(document, categories=tuple(categories))


def aggregate_adjustments(
    transfers: Iterable[Transfer] | None,
) -> dict[AssetKey, AssetAdjustment]:
    """Return deposits, withdraws and net movement per asset key.

    Args:
        transfers: Flat transfer list of a month.

    Returns:
        dict[AssetKey, AssetAdjustment]: Adjustment per touched asset.
    """
    adjustments: dict[AssetKey, AssetAdjustment] = {}

    def _add(key: AssetKey, deposits: Decimal, withdraws: Decimal) -> None:
        current = adjustments.get(key, AssetAdjustment())
        adjustments[key] = AssetAdjustment(
            deposits=current.deposits + deposits,
            withdraws=current.withdraws + withdraws,
        )

    for transfer in transfers or ():
        if isinstance(transfer, Deposit):
            key = build_asset_key(
                transfer.category, transfer.source, transfer.name
            )
            _add(key, transfer.amount, ZERO)
        elif isinstance(transfer, Withdraw):
            key = build_asset_key(
                transfer.category, transfer.source, transfer.name
            )
            _add(key, ZERO, transfer.amount)
        elif isinstance(transfer, Move):
            from_key = build_asset_key(
                transfer.from_category,
                transfer.from_source,
                transfer.from_name,
            )
            to_key = build_asset_key(
                transfer.to_category,
                transfer.to_source,
                transfer.to_name,
            )
            _add(from_key, ZERO, transfer.amount)
            _add(to_key, transfer.amount, ZERO)
    return adjustments


def sum_flows(
    transfers: Iterable[Transfer] | None,
) -> tuple[Decimal, Decimal]:
    """Return total deposits and total withdraws; moves are ignored."""
    deposits = ZERO
    withdraws = ZERO
    for transfer in transfers or ():
        if isinstance(transfer, Deposit):
            deposits += transfer.amount
        elif isinstance(transfer, Withdraw):
            withdraws += transfer.amount
    return deposits, withdraws


__all__ = [
    "merge_transfers",
    "apply_transfer_operation",
    "aggregate_adjustments",
    "sum_flows",
]
