"""Domain models for monthly portfolio documents."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.utils.decimal_utils import ZERO


@dataclass(frozen=True)
class AssetEntry:
    """Single holding inside a category.

    Attributes:
        name: Display name of the holding.
        source: Broker, bank or wallet label.
        val: Current value, after merged transfers when virtual.
        original_val: Value before the first merged transfer, if any.
        is_virtual: True once a transfer has been merged into the entry.
        adjustment: Net signed amount merged into the entry.
        adjustment_history: Signed amounts merged, in merge order.
    """

    name: str
    source: str
    val: Decimal
    original_val: Decimal | None = None
    is_virtual: bool = False
    adjustment: Decimal = ZERO
    adjustment_history: tuple[Decimal, ...] = ()


@dataclass(frozen=True)
class Category:
    """Group of holdings with display metadata."""

    id: str
    title: str
    color: str
    items: tuple[AssetEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PortfolioDocument:
    """Monthly portfolio document as an ordered list of categories."""

    categories: tuple[Category, ...] = field(default_factory=tuple)

    def find_category(self, category_id: str) -> Category | None:
        """Return the category with an exactly matching id."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


@dataclass(frozen=True)
class CategoryInfo:
    """Display metadata of a category from the shared catalog.

    Attributes:
        id: Raw category id.
        title: Display title.
        color: CSS color, empty when unset.
        order: Position in the dashboard; None when unset.
    """

    id: str
    title: str
    color: str
    order: int | None = None


__all__ = ["AssetEntry", "Category", "CategoryInfo", "PortfolioDocument"]
