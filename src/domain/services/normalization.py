"""Domain normalization helpers."""

import re

from src.domain.models.keys import AssetKey

_WHITESPACE = re.compile(r"\s+")


def normalize_key_part(value: str | None) -> str:
    """Case-fold a key part and collapse whitespace runs to underscores.

    Args:
        value: Raw category id, source label or asset name.

    Returns:
        str: Normalized key part, empty for missing values.
    """
    if value is None:
        return ""
    return _WHITESPACE.sub("_", str(value).casefold())


def build_asset_key(
    category_id: str | None,
    source: str | None,
    name: str | None,
) -> AssetKey:
    """Return the composite identity of an asset.

    Args:
        category_id: Identifier of the owning category.
        source: Source label (broker, bank, wallet).
        name: Asset name.

    Returns:
        AssetKey: Normalized key stable across months.
    """
    return AssetKey(
        normalize_key_part(category_id),
        normalize_key_part(source),
        normalize_key_part(name),
    )


__all__ = ["normalize_key_part", "build_asset_key"]
