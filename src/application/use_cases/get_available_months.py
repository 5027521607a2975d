"""Use case to list the months that can be selected."""

from src.application.ports.portfolio_source import (
    MonthOption,
    PortfolioSourcePort,
)
from src.infrastructure.logging.logger import get_app_logger


class GetAvailableMonthsUseCase:
    """Return the months that have a portfolio document."""

    def __init__(self, source: PortfolioSourcePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            source: Port used to list documents.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._source = source
        self._logger = logger or get_app_logger()

    async def execute(self) -> list[MonthOption]:
        """Return available months, oldest first.

        Raises:
            DataSourceError: If the source cannot be listed.
        """
        months = await self._source.list_available()
        ordered = sorted(months, key=lambda month: month.id)
        self._logger.info(f"Available months: {len(ordered)}")
        return ordered


__all__ = ["GetAvailableMonthsUseCase"]
