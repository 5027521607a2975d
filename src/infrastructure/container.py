"""Composition root for wiring infrastructure adapters."""

from src.application.ports.portfolio_source import PortfolioSourcePort
from src.application.use_cases.get_available_months import (
    GetAvailableMonthsUseCase,
)
from src.application.use_cases.get_year_forecast import (
    GetYearForecastUseCase,
)
from src.application.use_cases.load_month import LoadMonthUseCase
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.portfolio_source_factory import (
    create_portfolio_source,
)
from src.infrastructure.settings import PortfolioSourceSettings


def build_portfolio_source(
    settings: PortfolioSourceSettings | None = None,
) -> PortfolioSourcePort:
    """Return the configured portfolio source."""
    return create_portfolio_source(
        settings or PortfolioSourceSettings.from_env(),
        logger=get_app_logger(),
    )


def build_available_months_use_case(
    source: PortfolioSourcePort | None = None,
) -> GetAvailableMonthsUseCase:
    """Return the use case listing selectable months."""
    return GetAvailableMonthsUseCase(
        source or build_portfolio_source(),
        logger=get_app_logger(),
    )


def build_year_forecast_use_case(
    source: PortfolioSourcePort | None = None,
) -> GetYearForecastUseCase:
    """Return the year-to-date forecast use case."""
    return GetYearForecastUseCase(
        source or build_portfolio_source(),
        logger=get_app_logger(),
    )


def build_load_month_use_case(
    source: PortfolioSourcePort | None = None,
) -> LoadMonthUseCase:
    """Return the month loading use case."""
    resolved = source or build_portfolio_source()
    return LoadMonthUseCase(
        resolved,
        forecast_use_case=build_year_forecast_use_case(resolved),
        logger=get_app_logger(),
    )


__all__ = [
    "build_portfolio_source",
    "build_available_months_use_case",
    "build_year_forecast_use_case",
    "build_load_month_use_case",
]
