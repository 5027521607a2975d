"""Application ports package."""

from .portfolio_source import (
    DataSourceAuthError,
    DataSourceError,
    MonthOption,
    PortfolioSourcePort,
)

__all__ = [
    "DataSourceAuthError",
    "DataSourceError",
    "MonthOption",
    "PortfolioSourcePort",
]
