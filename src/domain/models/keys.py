"""Composite identity of an asset across monthly documents."""

from typing import NamedTuple

from src.domain.constants import ASSET_KEY_SEPARATOR


class AssetKey(NamedTuple):
    """Normalized (category, source, name) identity of a holding.

    Parts are expected to be normalized already; build keys with
    ``src.domain.services.normalization.build_asset_key``.
    """

    category_id: str
    source: str
    name: str

    def __str__(self) -> str:
        return ASSET_KEY_SEPARATOR.join(self)


__all__ = ["AssetKey"]
