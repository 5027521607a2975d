"""Single-month performance and return compounding."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import (
    MIN_INVESTED_CAPITAL,
    MONTHS_PER_YEAR,
    ZERO_CAPITAL_YIELD_PERCENT,
    ZERO_CAPITAL_YIELD_RATIO,
)
from src.domain.models import MonthPerformance, Transfer
from src.domain.services.transfers import sum_flows
from src.utils.decimal_utils import ZERO, coerce_decimal, to_percent

ONE = Decimal("1")


def calculate_performance(
    start_balance: Decimal,
    end_balance: Decimal,
    transfers: Iterable[Transfer] | None,
    is_first_month: bool = False,
) -> MonthPerformance:
    """Compute profit and simple return for one month.

    On the first tracked month the whole end balance counts as deposited
    capital and profit and yield are forced to zero.

    Args:
        start_balance: Virtual balance at the end of the previous month.
        end_balance: Virtual balance at the end of this month.
        transfers: Transfers of this month.
        is_first_month: Whether no earlier month exists.

    Returns:
        MonthPerformance: Flows, profit and yield in percent.
    """
    if is_first_month:
        return MonthPerformance(
            start_balance=ZERO,
            end_balance=end_balance,
            total_deposits=end_balance,
            total_withdraws=ZERO,
            net_flow=end_balance,
            profit=ZERO,
            yield_percent=ZERO,
        )

    deposits, withdraws = sum_flows(transfers)
    net_flow = deposits - withdraws
    profit = end_balance - (start_balance + net_flow)
    invested_capital = start_balance + deposits

    if invested_capital > MIN_INVESTED_CAPITAL:
        yield_percent = to_percent(profit / invested_capital)
    elif profit > 0:
        yield_percent = ZERO_CAPITAL_YIELD_PERCENT
    else:
        yield_percent = ZERO

    return MonthPerformance(
        start_balance=start_balance,
        end_balance=end_balance,
        total_deposits=deposits,
        total_withdraws=withdraws,
        net_flow=net_flow,
        profit=profit,
        yield_percent=yield_percent,
    )


def calculate_simple_yield(
    start_balance: Decimal,
    end_balance: Decimal,
    transfers: Iterable[Transfer] | None,
) -> Decimal:
    """Return profit over invested capital as a fraction (0.05 == 5%)."""
    deposits, withdraws = sum_flows(transfers)
    profit = end_balance - (start_balance + deposits - withdraws)
    invested_capital = start_balance + deposits
    if invested_capital <= MIN_INVESTED_CAPITAL:
        return ZERO_CAPITAL_YIELD_RATIO if profit > 0 else ZERO
    return profit / invested_capital


def calculate_ytd(yields: Iterable) -> Decimal:
    """Compound monthly yields: (1 + r1) * (1 + r2) * ... - 1."""
    compounded = ONE
    for value in yields:
        compounded *= ONE + coerce_decimal(value)
    return compounded - ONE


def calculate_projected_annual(ytd, months_passed: int) -> Decimal:
    """Extrapolate a year-to-date return to a full year.

    Args:
        ytd: Compounded year-to-date return as a fraction.
        months_passed: Number of months the return covers.

    Returns:
        Decimal: (1 + ytd) ** (12 / months_passed) - 1; -1 when the base is
        not positive, 0 when no month has passed.
    """
    if months_passed <= 0:
        return ZERO
    base = ONE + coerce_decimal(ytd)
    if base <= 0:
        return -ONE
    exponent = Decimal(MONTHS_PER_YEAR) / Decimal(months_passed)
    return base ** exponent - ONE


__all__ = [
    "calculate_performance",
    "calculate_simple_yield",
    "calculate_ytd",
    "calculate_projected_annual",
]
