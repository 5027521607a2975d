"""Normalized, read-only views of a portfolio document."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType

from src.domain.models.keys import AssetKey
from src.utils.decimal_utils import ZERO


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class AssetRecord:
    """Asset as seen by the comparator."""

    key: AssetKey
    category_id: str
    source: str
    name: str
    val: Decimal
    original_val: Decimal
    is_virtual: bool = False
    adjustment: Decimal = ZERO
    adjustment_history: tuple[Decimal, ...] = ()


@dataclass(frozen=True)
class CategorySnapshot:
    """Category total and the assets it holds."""

    id: str
    title: str
    color: str
    total: Decimal
    items: Mapping[AssetKey, AssetRecord] = field(
        default_factory=_empty_mapping
    )


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Grand total, per-category view and flat asset map of one month."""

    total: Decimal
    categories: Mapping[str, CategorySnapshot] = field(
        default_factory=_empty_mapping
    )
    asset_map: Mapping[AssetKey, AssetRecord] = field(
        default_factory=_empty_mapping
    )

    @classmethod
    def empty(cls) -> "PortfolioSnapshot":
        """Return the all-zero snapshot used for absent documents."""
        return cls(total=ZERO)


__all__ = ["AssetRecord", "CategorySnapshot", "PortfolioSnapshot"]
