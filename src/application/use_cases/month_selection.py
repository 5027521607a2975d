"""Track the current month selection and drop stale loads."""

from collections.abc import Sequence

from src.application.ports.portfolio_source import MonthOption
from src.application.use_cases.load_month import LoadMonthUseCase, MonthView


class MonthSelection:
    """Keys in-flight month loads by the requested month.

    In-flight fetches are not cancelled; a load that completes after a
    newer month was selected is discarded instead of being returned.
    """

    def __init__(
        self,
        load_month: LoadMonthUseCase,
        available_months: Sequence[MonthOption],
    ) -> None:
        self._load_month = load_month
        self._available_months = list(available_months)
        self._current_month_id: str | None = None

    @property
    def current_month_id(self) -> str | None:
        return self._current_month_id

    @property
    def available_months(self) -> list[MonthOption]:
        return list(self._available_months)

    def select(self, month_id: str) -> None:
        """Mark month_id as the current selection."""
        self._current_month_id = month_id

    def accept(self, view: MonthView) -> bool:
        """Return True when view belongs to the current selection."""
        return view.month_id == self._current_month_id

    async def load(self, month_id: str) -> MonthView | None:
        """Select and load a month.

        Returns:
            MonthView | None: The view, or None when another month was
            selected while this one was loading.
        """
        self.select(month_id)
        view = await self._load_month.execute(month_id, self._available_months)
        return view if self.accept(view) else None


__all__ = ["MonthSelection"]
