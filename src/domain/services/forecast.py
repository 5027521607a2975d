"""Year-to-date yield chain and annual projection."""

from collections.abc import Sequence
from decimal import Decimal

from src.domain.models import MonthData, YearForecast
from src.domain.services.performance import (
    calculate_projected_annual,
    calculate_simple_yield,
    calculate_ytd,
)
from src.domain.services.snapshots import calculate_total_balance
from src.domain.services.transfers import merge_transfers, sum_flows
from src.utils.decimal_utils import ZERO


def build_year_forecast(
    sequence: Sequence[MonthData],
    target_month_id: str,
) -> YearForecast:
    """Walk months from January to the target month and chain yields.

    The first month of the sequence yields 0 and its end balance counts as
    contributed capital. A month without a document yields 0 and leaves the
    balance chain untouched.

    Args:
        sequence: Months in chronological order, ending at the target.
        target_month_id: Month whose own yield and profit are reported.

    Returns:
        YearForecast: Month, year-to-date and projected figures.
    """
    yields: list[Decimal] = []
    month_yield = ZERO
    month_profit = ZERO
    previous_balance = ZERO
    contributed_capital = ZERO

    for index, month in enumerate(sequence):
        if month.document is None:
            yields.append(ZERO)
            continue

        merged = merge_transfers(month.document, month.transfers)
        end_balance = calculate_total_balance(merged)
        deposits, withdraws = sum_flows(month.transfers)
        net_flow = deposits - withdraws

        if index == 0:
            yield_value = ZERO
            profit = ZERO
            contributed_capital += end_balance
        else:
            yield_value = calculate_simple_yield(
                previous_balance,
                end_balance,
                month.transfers,
            )
            profit = end_balance - (previous_balance + net_flow)
            contributed_capital += net_flow

        yields.append(yield_value)
        if month.month_id == target_month_id:
            month_yield = yield_value
            month_profit = profit
        previous_balance = end_balance

    ytd = calculate_ytd(yields)
    projected = calculate_projected_annual(ytd, len(sequence))
    return YearForecast(
        month_yield=month_yield,
        month_profit=month_profit,
        ytd=ytd,
        ytd_profit=previous_balance - contributed_capital,
        projected=projected,
        projected_profit=previous_balance * projected,
        yields=tuple(yields),
    )


__all__ = ["build_year_forecast"]
