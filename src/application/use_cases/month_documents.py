"""Fetch helpers for monthly documents and transfer files.

Transfers for a month may be split across ``transfers-YYYY-MM.json`` and
one file per day, ``transfers-YYYY-MM-DD.json``. All candidate files are
requested concurrently.
"""

import asyncio
from collections.abc import Iterable

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.domain.models import (
    CategoryInfo,
    PortfolioDocument,
    Transfer,
    TransferBatch,
)
from src.domain.services.documents import (
    parse_category_catalog,
    parse_portfolio_document,
    parse_transfer_file,
)

CATEGORIES_DOCUMENT = "categories.json"
DAYS_PER_MONTH_MAX = 31


def portfolio_document_name(month_id: str) -> str:
    return f"{month_id}.json"


def transfer_file_names(month_id: str) -> list[str]:
    """Return the monthly transfer file name followed by the daily ones."""
    names = [f"transfers-{month_id}.json"]
    names += [
        f"transfers-{month_id}-{day:02d}.json"
        for day in range(1, DAYS_PER_MONTH_MAX + 1)
    ]
    return names


async def fetch_month_document(
    source: PortfolioSourcePort,
    month_id: str,
    logger=None,
) -> PortfolioDocument | None:
    """Fetch and parse the portfolio document of a month.

    Returns:
        PortfolioDocument | None: None when absent or malformed.
    """
    payload = await source.fetch_document(portfolio_document_name(month_id))
    return parse_portfolio_document(payload, logger)


async def fetch_month_transfers(
    source: PortfolioSourcePort,
    month_id: str,
    logger=None,
) -> list[TransferBatch]:
    """Fetch every transfer file of a month, oldest batch first.

    Args:
        source: Port used to fetch documents.
        month_id: Month id in ``YYYY-MM`` form.
        logger: Optional logger passed to the parsers.

    Returns:
        list[TransferBatch]: Non-empty batches sorted by date.
    """
    payloads = await asyncio.gather(
        *(
            source.fetch_document(name)
            for name in transfer_file_names(month_id)
        )
    )
    batches = [
        batch
        for batch in (
            parse_transfer_file(payload, month_id, logger)
            for payload in payloads
        )
        if batch is not None
    ]
    return sorted(batches, key=lambda batch: batch.date)


def flatten_transfers(
    batches: Iterable[TransferBatch],
) -> tuple[Transfer, ...]:
    """Return the transfers of every batch in batch order."""
    return tuple(
        transfer for batch in batches for transfer in batch.transfers
    )


async def fetch_category_catalog(
    source: PortfolioSourcePort,
) -> dict[str, CategoryInfo]:
    """Fetch the shared category catalog; empty when absent."""
    return parse_category_catalog(
        await source.fetch_document(CATEGORIES_DOCUMENT)
    )


__all__ = [
    "CATEGORIES_DOCUMENT",
    "portfolio_document_name",
    "transfer_file_names",
    "fetch_month_document",
    "fetch_month_transfers",
    "flatten_transfers",
    "fetch_category_catalog",
]
