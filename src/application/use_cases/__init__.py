"""Application use cases package."""

from .get_available_months import GetAvailableMonthsUseCase
from .get_year_forecast import GetYearForecastUseCase
from .load_month import LoadMonthUseCase, MonthNotFoundError, MonthView
from .month_selection import MonthSelection

__all__ = [
    "GetAvailableMonthsUseCase",
    "GetYearForecastUseCase",
    "LoadMonthUseCase",
    "MonthNotFoundError",
    "MonthView",
    "MonthSelection",
]
