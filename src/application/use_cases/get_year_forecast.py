"""Use case to build the year-to-date forecast for a month."""

import asyncio

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.application.use_cases.month_documents import (
    fetch_month_document,
    fetch_month_transfers,
    flatten_transfers,
)
from src.domain.models import MonthData, YearForecast
from src.domain.services.calendar import year_to_date_months
from src.domain.services.forecast import build_year_forecast
from src.infrastructure.logging.logger import get_app_logger


class GetYearForecastUseCase:
    """Chain monthly yields from January through the selected month."""

    def __init__(self, source: PortfolioSourcePort, logger=None) -> None:
        """Initialize the use case.

        Args:
            source: Port used to fetch documents.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._source = source
        self._logger = logger or get_app_logger()

    async def execute(self, month_id: str) -> YearForecast:
        """Return month, year-to-date and projected annual figures.

        Every month's document and transfers are fetched concurrently within
        one source session; the yield chain is then built sequentially.

        Args:
            month_id: Target month in ``YYYY-MM`` form.

        Returns:
            YearForecast: Forecast for the target month.

        Raises:
            DataSourceError: If any month cannot be retrieved.
        """
        async with self._source.session():
            sequence = await asyncio.gather(
                *(
                    self._fetch_month(mid)
                    for mid in year_to_date_months(month_id)
                )
            )
        ordered = sorted(sequence, key=lambda month: month.month_id)
        forecast = build_year_forecast(ordered, month_id)
        self._logger.info(
            f"Forecast computed for {month_id}: ytd={forecast.ytd:.6f}, "
            f"projected={forecast.projected:.6f}"
        )
        return forecast

    async def _fetch_month(self, month_id: str) -> MonthData:
        document, batches = await asyncio.gather(
            fetch_month_document(self._source, month_id, self._logger),
            fetch_month_transfers(self._source, month_id, self._logger),
        )
        return MonthData(
            month_id=month_id,
            document=document,
            transfers=flatten_transfers(batches),
        )


__all__ = ["GetYearForecastUseCase"]
