"""Display helpers shared by the dashboard and the CLI."""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from src.domain.constants import FALLBACK_CATEGORY_COLOR
from src.domain.models import (
    CategoryInfo,
    CategorySnapshot,
    Deposit,
    Move,
    PortfolioDocument,
    Transfer,
)
from src.utils.decimal_utils import HUNDRED


def format_money(value: Decimal, symbol: str = "$") -> str:
    """Format a money amount with thousands separators."""
    sign = "-" if value < 0 else ""
    return f"{sign}{abs(value):,.2f} {symbol}"


def format_signed_money(value: Decimal, symbol: str = "$") -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{format_money(value, symbol)}"


def format_percent(value: Decimal) -> str:
    """Format a value already expressed in percent, with its sign."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def format_ratio(value: Decimal) -> str:
    """Format a fractional ratio (0.05) as a signed percentage."""
    return format_percent(value * HUNDRED)


def category_title(
    category_id: str,
    catalog: Mapping[str, CategoryInfo],
    document: PortfolioDocument | None,
) -> str:
    """Resolve a category title from the catalog, then the document."""
    if category_id in catalog:
        return catalog[category_id].title
    category = document.find_category(category_id) if document else None
    return category.title if category else category_id


def category_color(
    category_id: str,
    catalog: Mapping[str, CategoryInfo],
    document: PortfolioDocument | None,
) -> str:
    """Resolve a category color from the catalog, then the document."""
    if category_id in catalog and catalog[category_id].color:
        return catalog[category_id].color
    category = document.find_category(category_id) if document else None
    if category is None or not category.color:
        return FALLBACK_CATEGORY_COLOR
    return category.color


def sort_categories(
    categories: Iterable[CategorySnapshot],
    catalog: Mapping[str, CategoryInfo],
) -> list[CategorySnapshot]:
    """Order categories by catalog position, then by total descending.

    Categories without a catalog order follow the ordered ones.
    """

    def _rank(category: CategorySnapshot) -> tuple[int, Decimal]:
        info = catalog.get(category.id)
        if info is not None and info.order is not None:
            return (0, Decimal(info.order))
        return (1, -category.total)

    return sorted(categories, key=_rank)


def format_transfer_path(
    category_id: str,
    source: str,
    name: str,
    catalog: Mapping[str, CategoryInfo],
    document: PortfolioDocument | None,
) -> str:
    title = category_title(category_id, catalog, document)
    return f"{title} › {source} › {name}"


def describe_transfer(
    transfer: Transfer,
    catalog: Mapping[str, CategoryInfo],
    document: PortfolioDocument | None,
) -> dict[str, str]:
    """Return a display row for a transfer.

    Args:
        transfer: Deposit, withdraw or move record.
        catalog: Shared category catalog.
        document: Month document used as fallback for category metadata.

    Returns:
        dict[str, str]: Type, path (``from → to`` for moves) and amount.
    """
    if isinstance(transfer, Move):
        from_path = format_transfer_path(
            transfer.from_category,
            transfer.from_source,
            transfer.from_name,
            catalog,
            document,
        )
        to_path = format_transfer_path(
            transfer.to_category,
            transfer.to_source,
            transfer.to_name,
            catalog,
            document,
        )
        return {
            "Type": "move",
            "Path": f"{from_path} → {to_path}",
            "Amount": format_money(transfer.amount),
        }
    is_deposit = isinstance(transfer, Deposit)
    prefix = "+" if is_deposit else "-"
    return {
        "Type": "deposit" if is_deposit else "withdraw",
        "Path": format_transfer_path(
            transfer.category,
            transfer.source,
            transfer.name,
            catalog,
            document,
        ),
        "Amount": f"{prefix}{format_money(transfer.amount)}",
    }


__all__ = [
    "format_money",
    "format_signed_money",
    "format_percent",
    "format_ratio",
    "category_title",
    "category_color",
    "sort_categories",
    "format_transfer_path",
    "describe_transfer",
]
