"""Performance and forecast results."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.models.portfolio import PortfolioDocument
from src.domain.models.transfers import Transfer
from src.utils.decimal_utils import ZERO


@dataclass(frozen=True)
class AssetAdjustment:
    """Capital movement implied by transfers for one asset."""

    deposits: Decimal = ZERO
    withdraws: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        """Return deposits minus withdraws."""
        return self.deposits - self.withdraws


@dataclass(frozen=True)
class MonthPerformance:
    """Profit and simple return of a single month.

    Attributes:
        start_balance: Virtual balance at the end of the previous month.
        end_balance: Virtual balance at the end of the month.
        total_deposits: Sum of deposit amounts.
        total_withdraws: Sum of withdraw amounts.
        net_flow: Deposits minus withdraws.
        profit: End balance minus start balance and net flow.
        yield_percent: Profit over invested capital, in percent.
    """

    start_balance: Decimal
    end_balance: Decimal
    total_deposits: Decimal
    total_withdraws: Decimal
    net_flow: Decimal
    profit: Decimal
    yield_percent: Decimal


@dataclass(frozen=True)
class MonthData:
    """Raw inputs of one month in a year-to-date sequence."""

    month_id: str
    document: PortfolioDocument | None
    transfers: tuple[Transfer, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class YearForecast:
    """Current month, year-to-date and projected annual returns.

    Ratios are fractional (0.05 means 5%); profits are money amounts.
    """

    month_yield: Decimal
    month_profit: Decimal
    ytd: Decimal
    ytd_profit: Decimal
    projected: Decimal
    projected_profit: Decimal
    yields: tuple[Decimal, ...] = ()


__all__ = [
    "AssetAdjustment",
    "MonthPerformance",
    "MonthData",
    "YearForecast",
]
