"""Parsing of external JSON documents into domain models.

Monthly documents have the shape
``{"portfolio": [{"id", "title", "color", "items": [{"name", "source",
"val"}]}]}``. Transfer files are ``{"meta": {"date"}, "transfers": [...]}``
or a bare list of transfers.
"""

from collections.abc import Mapping
from logging import Logger
from typing import Any

from src.domain.models import (
    AssetEntry,
    Category,
    CategoryInfo,
    Deposit,
    Move,
    PortfolioDocument,
    Transfer,
    TransferBatch,
    Withdraw,
)
from src.domain.services.validation import validate_transfer_amount
from src.utils.decimal_utils import coerce_decimal


def parse_portfolio_document(
    payload: Any,
    logger: Logger | None = None,
) -> PortfolioDocument | None:
    """Build a PortfolioDocument from a parsed JSON payload.

    Args:
        payload: Parsed JSON, or None when the document is absent.
        logger: Optional logger used for malformed-structure warnings.

    Returns:
        PortfolioDocument | None: Parsed document, or None when the payload
        has no ``portfolio`` list.
    """
    if payload is None:
        return None
    raw_categories = (
        payload.get("portfolio") if isinstance(payload, Mapping) else None
    )
    if not isinstance(raw_categories, list):
        if logger:
            logger.warning("Portfolio document is missing a portfolio list")
        return None

    categories = []
    for raw in raw_categories:
        if not isinstance(raw, Mapping) or raw.get("id") is None:
            if logger:
                logger.warning(f"Skipping malformed category: {raw!r}")
            continue
        category_id = str(raw["id"])
        raw_items = raw.get("items")
        items = tuple(
            _parse_asset_entry(item)
            for item in (raw_items if isinstance(raw_items, list) else [])
            if isinstance(item, Mapping)
        )
        categories.append(
            Category(
                id=category_id,
                title=str(raw.get("title") or category_id),
                color=str(raw.get("color") or ""),
                items=items,
            )
        )
    return PortfolioDocument(categories=tuple(categories))


def _parse_asset_entry(raw: Mapping) -> AssetEntry:
    return AssetEntry(
        name=str(raw.get("name") or ""),
        source=str(raw.get("source") or ""),
        val=coerce_decimal(raw.get("val")),
    )


def parse_transfer(
    raw: Any,
    logger: Logger | None = None,
) -> Transfer | None:
    """Build a transfer record from its JSON form.

    Args:
        raw: Transfer mapping with a ``type`` of deposit, withdraw or move.
        logger: Optional logger used for warnings.

    Returns:
        Transfer | None: Parsed transfer, or None for unknown types.
    """
    if not isinstance(raw, Mapping):
        return None
    kind = raw.get("type")
    amount = coerce_decimal(raw.get("amount"))
    transfer: Transfer
    if kind in ("deposit", "withdraw"):
        record_cls = Deposit if kind == "deposit" else Withdraw
        transfer = record_cls(
            category=str(raw.get("category") or ""),
            source=str(raw.get("source") or ""),
            name=str(raw.get("name") or ""),
            amount=amount,
        )
    elif kind == "move":
        transfer = Move(
            from_category=str(raw.get("from_category") or ""),
            from_source=str(raw.get("from_source") or ""),
            from_name=str(raw.get("from_name") or ""),
            to_category=str(raw.get("to_category") or ""),
            to_source=str(raw.get("to_source") or ""),
            to_name=str(raw.get("to_name") or ""),
            amount=amount,
        )
    else:
        if logger:
            logger.warning(f"Ignoring transfer with unknown type: {kind!r}")
        return None
    if logger:
        validate_transfer_amount(transfer, logger)
    return transfer


def parse_transfer_file(
    payload: Any,
    default_date: str,
    logger: Logger | None = None,
) -> TransferBatch | None:
    """Build a TransferBatch from a transfer file payload.

    Args:
        payload: Parsed JSON of the file, or None when absent.
        default_date: Date used when the file has no ``meta.date``.
        logger: Optional logger used for warnings.

    Returns:
        TransferBatch | None: Batch of transfers, or None when the file is
        absent or holds no transfers.
    """
    if payload is None:
        return None
    if isinstance(payload, list):
        payload = {"meta": {}, "transfers": payload}
    if not isinstance(payload, Mapping):
        return None
    raw_transfers = payload.get("transfers")
    if not isinstance(raw_transfers, list) or not raw_transfers:
        return None
    meta = payload.get("meta")
    batch_date = (
        meta.get("date") if isinstance(meta, Mapping) else None
    ) or default_date
    transfers = tuple(
        transfer
        for transfer in (parse_transfer(raw, logger) for raw in raw_transfers)
        if transfer is not None
    )
    return TransferBatch(date=str(batch_date), transfers=transfers)


def parse_category_catalog(payload: Any) -> dict[str, CategoryInfo]:
    """Build the shared category catalog from ``categories.json``.

    Args:
        payload: Mapping of category id to ``{"title", "color", "order"}``.

    Returns:
        dict[str, CategoryInfo]: Catalog keyed by raw category id; empty
        when the payload is absent or malformed.
    """
    if not isinstance(payload, Mapping):
        return {}
    catalog: dict[str, CategoryInfo] = {}
    for category_id, raw in payload.items():
        if not isinstance(raw, Mapping):
            continue
        catalog[str(category_id)] = CategoryInfo(
            id=str(category_id),
            title=str(raw.get("title") or category_id),
            color=str(raw.get("color") or ""),
            order=_parse_order(raw.get("order")),
        )
    return catalog


def _parse_order(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


__all__ = [
    "parse_category_catalog",
    "parse_portfolio_document",
    "parse_transfer",
    "parse_transfer_file",
]
