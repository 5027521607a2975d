"""Use case to load one month and compute its full view."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from src.application.ports.portfolio_source import (
    MonthOption,
    PortfolioSourcePort,
)
from src.application.use_cases.get_year_forecast import (
    GetYearForecastUseCase,
)
from src.application.use_cases.month_documents import (
    fetch_month_document,
    fetch_month_transfers,
    flatten_transfers,
)
from src.domain.models import (
    MonthPerformance,
    PortfolioDocument,
    PortfolioSnapshot,
    SnapshotComparison,
    Transfer,
    TransferBatch,
    YearForecast,
)
from src.domain.services.calendar import month_label, previous_month_id
from src.domain.services.comparison import compare_snapshots
from src.domain.services.performance import calculate_performance
from src.domain.services.snapshots import build_snapshot
from src.domain.services.transfers import (
    aggregate_adjustments,
    merge_transfers,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import ZERO


class MonthNotFoundError(LookupError):
    """Raised when the selected month has no portfolio document."""

    def __init__(self, month_id: str) -> None:
        super().__init__(f"No portfolio document found for {month_id}")
        self.month_id = month_id


@dataclass(frozen=True)
class MonthView:
    """Everything computed for one month selection.

    Attributes:
        month_id: Selected month.
        label: Display label of the month.
        previous_month_id: Preceding available month, if any.
        document: Portfolio document as fetched.
        virtual_document: Document with the month's transfers merged in.
        transfer_batches: Transfer files of the month, oldest first.
        transfers: Flat transfer list in batch order.
        snapshot: Snapshot of the virtual document.
        previous_snapshot: Snapshot of the previous virtual document.
        comparison: Month-over-month deltas; None on the first month.
        performance: Profit and yield of the month.
        forecast: Month, year-to-date and projected annual returns.
    """

    month_id: str
    label: str
    previous_month_id: str | None
    document: PortfolioDocument
    virtual_document: PortfolioDocument
    transfer_batches: tuple[TransferBatch, ...]
    transfers: tuple[Transfer, ...]
    snapshot: PortfolioSnapshot
    previous_snapshot: PortfolioSnapshot | None
    comparison: SnapshotComparison | None
    performance: MonthPerformance
    forecast: YearForecast

    @property
    def is_first_month(self) -> bool:
        return self.previous_month_id is None


class LoadMonthUseCase:
    """Fetch a month with its predecessor and compute the month view."""

    def __init__(
        self,
        source: PortfolioSourcePort,
        forecast_use_case: GetYearForecastUseCase | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            source: Port used to fetch documents.
            forecast_use_case: Optional forecast use case override.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._source = source
        self._logger = logger or get_app_logger()
        self._forecast_use_case = forecast_use_case or GetYearForecastUseCase(
            source,
            logger=self._logger,
        )

    async def execute(
        self,
        month_id: str,
        available_months: Sequence[MonthOption],
    ) -> MonthView:
        """Return the computed view of the selected month.

        The current and previous documents and transfer files are fetched
        concurrently within one source session, followed by the forecast
        months. Computation starts once all of them are available.

        Args:
            month_id: Selected month in ``YYYY-MM`` form.
            available_months: Selectable months, oldest first.

        Returns:
            MonthView: Snapshots, comparison, performance and forecast.

        Raises:
            MonthNotFoundError: If the month has no portfolio document.
            DataSourceError: If the source fails to deliver a document,
                including the ones the forecast needs.
        """
        month_ids = [month.id for month in available_months]
        prev_id = previous_month_id(month_id, month_ids)

        async with self._source.session():
            (
                document,
                previous_document,
                batches,
                previous_batches,
            ) = await asyncio.gather(
                fetch_month_document(self._source, month_id, self._logger),
                self._fetch_optional_document(prev_id),
                fetch_month_transfers(self._source, month_id, self._logger),
                self._fetch_optional_transfers(prev_id),
            )
            if document is None:
                raise MonthNotFoundError(month_id)
            forecast = await self._forecast_use_case.execute(month_id)

        transfers = flatten_transfers(batches)
        virtual_document = merge_transfers(document, transfers, self._logger)
        virtual_previous = merge_transfers(
            previous_document,
            flatten_transfers(previous_batches),
            self._logger,
        )

        snapshot = build_snapshot(virtual_document)
        previous_snapshot = (
            build_snapshot(virtual_previous)
            if virtual_previous is not None
            else None
        )
        comparison = (
            compare_snapshots(
                snapshot,
                previous_snapshot,
                aggregate_adjustments(transfers),
            )
            if previous_snapshot is not None
            else None
        )
        performance = calculate_performance(
            previous_snapshot.total if previous_snapshot else ZERO,
            snapshot.total,
            transfers,
            is_first_month=prev_id is None,
        )
        self._logger.info(
            f"Month {month_id} loaded: total={snapshot.total}, "
            f"profit={performance.profit}, transfers={len(transfers)}"
        )

        return MonthView(
            month_id=month_id,
            label=self._resolve_label(month_id, available_months),
            previous_month_id=prev_id,
            document=document,
            virtual_document=virtual_document,
            transfer_batches=tuple(batches),
            transfers=transfers,
            snapshot=snapshot,
            previous_snapshot=previous_snapshot,
            comparison=comparison,
            performance=performance,
            forecast=forecast,
        )

    async def _fetch_optional_document(
        self,
        month_id: str | None,
    ) -> PortfolioDocument | None:
        if month_id is None:
            return None
        return await fetch_month_document(self._source, month_id, self._logger)

    async def _fetch_optional_transfers(
        self,
        month_id: str | None,
    ) -> list[TransferBatch]:
        if month_id is None:
            return []
        return await fetch_month_transfers(
            self._source,
            month_id,
            self._logger,
        )

    @staticmethod
    def _resolve_label(
        month_id: str,
        available_months: Sequence[MonthOption],
    ) -> str:
        for month in available_months:
            if month.id == month_id:
                return month.label
        return month_label(month_id)


__all__ = ["LoadMonthUseCase", "MonthNotFoundError", "MonthView"]
