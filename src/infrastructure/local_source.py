"""Portfolio source reading JSON documents from a local directory."""

import asyncio
from contextlib import asynccontextmanager
import json
from pathlib import Path
from typing import Any, AsyncIterator

from src.application.ports.portfolio_source import (
    MonthOption,
    PortfolioSourcePort,
)
from src.domain.services.calendar import month_label, months_until_year_end
from src.infrastructure.logging.logger import get_app_logger


class LocalJsonPortfolioSource(PortfolioSourcePort):
    """Source backed by ``<data_dir>/<name>`` JSON files."""

    def __init__(
        self,
        data_dir: Path,
        tracking_start: str,
        logger=None,
    ) -> None:
        """Initialize the source.

        Args:
            data_dir: Directory holding the JSON documents.
            tracking_start: First tracked month in ``YYYY-MM`` form.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._data_dir = Path(data_dir)
        self._tracking_start = tracking_start
        self._logger = logger or get_app_logger()

    async def fetch_document(self, name: str) -> Any | None:
        """Return the parsed document, or None when missing or unreadable."""
        return await asyncio.to_thread(self._read_json, self._data_dir / name)

    async def list_available(self) -> list[MonthOption]:
        """Return tracked months of the start year that have a document."""
        candidates = months_until_year_end(self._tracking_start)
        exists = await asyncio.gather(
            *(
                asyncio.to_thread(self._document_exists, f"{month_id}.json")
                for month_id in candidates
            )
        )
        return [
            MonthOption(id=month_id, label=month_label(month_id))
            for month_id, found in zip(candidates, exists)
            if found
        ]

    @asynccontextmanager
    async def session(self) -> AsyncIterator[None]:
        """Files are opened per read; nothing to share."""
        yield

    def _document_exists(self, name: str) -> bool:
        return (self._data_dir / name).is_file()

    def _read_json(self, path: Path) -> Any | None:
        if not path.is_file():
            return None
        try:
            with path.open(encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, ValueError) as exc:
            self._logger.warning(f"Local read failed for {path.name}: {exc}")
            return None


__all__ = ["LocalJsonPortfolioSource"]
