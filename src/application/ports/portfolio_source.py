"""Application port for retrieving portfolio documents.

A source behaves as a key-value store of parsed JSON documents addressed by
file name (``2026-03.json``, ``transfers-2026-03-15.json``,
``categories.json``). A missing document is a normal ``None`` result;
connectivity and credential failures raise ``DataSourceError``.
"""

from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any, Protocol


class DataSourceError(RuntimeError):
    """Raised when a document cannot be retrieved from the source."""


class DataSourceAuthError(DataSourceError):
    """Raised when the source rejects the configured credentials."""


@dataclass(frozen=True)
class MonthOption:
    """Month available for selection.

    Attributes:
        id: Month id in ``YYYY-MM`` form.
        label: Human-readable label.
    """

    id: str
    label: str


class PortfolioSourcePort(Protocol):
    """Port exposing read access to monthly and transfer documents."""

    async def fetch_document(self, name: str) -> Any | None:
        """Return the parsed JSON document, or None when it does not exist."""

    async def list_available(self) -> list[MonthOption]:
        """Return the months that have a portfolio document, oldest first."""

    def session(self) -> AbstractAsyncContextManager[None]:
        """Scope several fetches to one connection context.

        Sessions may nest; only the outermost one opens and closes resources.
        """


__all__ = [
    "DataSourceError",
    "DataSourceAuthError",
    "MonthOption",
    "PortfolioSourcePort",
]
