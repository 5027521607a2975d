"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from src.domain.models import AssetEntry, Transfer


def validate_transfer_amount(transfer: Transfer, logger: Logger) -> None:
    """Warn when a transfer carries a negative amount.

    Amounts are magnitudes; the sign comes from the transfer type.

    Args:
        transfer: Parsed transfer record.
        logger: Logger used for warnings.
    """
    if transfer.amount < 0:
        logger.warning(
            f"Transfer amount should be non-negative: "
            f"{type(transfer).__name__} {transfer.amount}"
        )


def validate_asset_balance(
    category_id: str,
    entry: AssetEntry,
    logger: Logger,
) -> None:
    """Warn when merged transfers leave an asset below zero.

    Args:
        category_id: Category holding the asset.
        entry: Asset after the merge.
        logger: Logger used for warnings.
    """
    if entry.val < Decimal("0"):
        logger.warning(
            f"Virtual balance is negative for {category_id}/"
            f"{entry.source}/{entry.name}: {entry.val}"
        )


__all__ = ["validate_transfer_amount", "validate_asset_balance"]
