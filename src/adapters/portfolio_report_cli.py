"""CLI adapter printing the portfolio report of one month.

The month is read from ``REPORT_MONTH`` (``YYYY-MM``); the latest available
month is used when it is not set.
"""

import asyncio
import os

from src.adapters.interface.formatting import (
    format_money,
    format_percent,
    format_ratio,
    format_signed_money,
    sort_categories,
)
from src.application.ports.portfolio_source import DataSourceError
from src.application.use_cases.load_month import MonthNotFoundError, MonthView
from src.domain.models import AssetStatus
from src.infrastructure.container import (
    build_available_months_use_case,
    build_load_month_use_case,
    build_portfolio_source,
)
from src.infrastructure.logging.logger import get_app_logger


def _format_report(view: MonthView) -> list[str]:
    performance = view.performance
    lines = [
        f"Portfolio report for {view.label}",
        f"Total: {format_money(view.snapshot.total)}",
    ]
    for category in sort_categories(view.snapshot.categories.values(), {}):
        lines.append(f"  {category.title}: {format_money(category.total)}")
    lines.append(
        f"Net flow: {format_signed_money(performance.net_flow)} "
        f"(+{format_money(performance.total_deposits)} / "
        f"-{format_money(performance.total_withdraws)})"
    )
    lines.append(
        f"Profit: {format_signed_money(performance.profit)} "
        f"({format_percent(performance.yield_percent)})"
    )
    if view.comparison is not None:
        for status in (AssetStatus.NEW, AssetStatus.GHOST):
            keys = view.comparison.assets_with_status(status)
            if keys:
                names = ", ".join(str(key) for key in keys)
                lines.append(f"{status.value.capitalize()} assets: {names}")
    forecast = view.forecast
    lines.append(
        f"Year to date: {format_ratio(forecast.ytd)} "
        f"({format_signed_money(forecast.ytd_profit)})"
    )
    lines.append(
        f"Annual projection: {format_ratio(forecast.projected)} "
        f"({format_signed_money(forecast.projected_profit)})"
    )
    return lines


async def _run(month_id: str | None) -> MonthView | None:
    source = build_portfolio_source()
    months = await build_available_months_use_case(source).execute()
    if not months:
        return None
    load_month = build_load_month_use_case(source)
    return await load_month.execute(month_id or months[-1].id, months)


def main() -> None:
    """Load the requested month and print its report."""
    logger = get_app_logger()
    month_id = os.getenv("REPORT_MONTH", "").strip() or None

    try:
        view = asyncio.run(_run(month_id))
    except MonthNotFoundError as exc:
        print(str(exc))
        return
    except DataSourceError as exc:
        logger.error(f"Portfolio report failed: {exc}")
        print(f"Failed to load portfolio data: {exc}")
        return

    if view is None:
        print("No monthly documents found.")
        return
    print("\n".join(_format_report(view)))


if __name__ == "__main__":  # pragma: no cover
    main()
