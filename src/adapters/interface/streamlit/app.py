"""Streamlit dashboard entry point."""

import asyncio
from collections.abc import Mapping, Sequence
from decimal import Decimal

import altair as alt
import streamlit as st

from src.adapters.interface.formatting import (
    category_color,
    category_title,
    describe_transfer,
    format_money,
    format_percent,
    format_ratio,
    format_signed_money,
    sort_categories,
)
from src.application.ports.portfolio_source import (
    DataSourceAuthError,
    DataSourceError,
    MonthOption,
)
from src.application.use_cases.load_month import (
    MonthNotFoundError,
    MonthView,
)
from src.application.use_cases.month_documents import fetch_category_catalog
from src.application.use_cases.month_selection import MonthSelection
from src.domain.models import (
    AssetRecord,
    AssetStatus,
    CategoryInfo,
    CategorySnapshot,
    SnapshotComparison,
    YearForecast,
)
from src.infrastructure.container import (
    build_available_months_use_case,
    build_load_month_use_case,
    build_portfolio_source,
)
from src.infrastructure.logging.logger import get_usage_logger

_SELECTION_KEY = "month_selection"


def _fetch_available_months() -> list[MonthOption]:
    """Fetch the selectable months from the configured source."""
    use_case = build_available_months_use_case()
    return asyncio.run(use_case.execute())


@st.cache_data(show_spinner=False, ttl=300)
def _load_available_months() -> list[MonthOption]:
    """Cached wrapper around _fetch_available_months."""
    return _fetch_available_months()


def _fetch_category_catalog() -> dict[str, CategoryInfo]:
    """Fetch the shared category catalog."""
    return asyncio.run(fetch_category_catalog(build_portfolio_source()))


@st.cache_data(show_spinner=False, ttl=300)
def _load_category_catalog() -> dict[str, CategoryInfo]:
    """Cached wrapper around _fetch_category_catalog."""
    return _fetch_category_catalog()


def _month_selection(months: Sequence[MonthOption]) -> MonthSelection:
    """Return the browser session's selection, rebuilt when months change."""
    selection = st.session_state.get(_SELECTION_KEY)
    if selection is None or selection.available_months != list(months):
        selection = MonthSelection(build_load_month_use_case(), months)
        st.session_state[_SELECTION_KEY] = selection
    return selection


def _fetch_month_view(
    month_id: str,
    months: Sequence[MonthOption],
) -> MonthView | None:
    """Load the view of a month, dropping it if the selection moved on."""
    return asyncio.run(_month_selection(months).load(month_id))


def _adjustment_trail(record: AssetRecord) -> str:
    """Return ``original + a - b`` for assets with merged transfers."""
    if not record.is_virtual:
        return ""
    parts = [f"{record.original_val:,.2f}"]
    for amount in record.adjustment_history:
        sign = "+" if amount >= 0 else "-"
        parts.append(f"{sign} {abs(amount):,.2f}")
    return " ".join(parts) + f" = {record.val:,.2f}"


def _category_rows(
    category: CategorySnapshot,
    comparison: SnapshotComparison | None,
) -> list[dict[str, str]]:
    """Build table rows for a category, hiding assets empty in both months.

    Rows are sorted by value, largest first, with ghost assets last.

    Args:
        category: Category of the current snapshot.
        comparison: Month-over-month comparison, if any.

    Returns:
        list[dict[str, str]]: Rows for ``st.dataframe``.
    """
    rows = []
    keys = list(category.items)
    if comparison is not None:
        keys += [
            key
            for key, asset in comparison.assets.items()
            if asset.category_id == category.id and key not in category.items
        ]

    def _rank(key) -> tuple[bool, Decimal]:
        record = category.items.get(key)
        asset = comparison.assets.get(key) if comparison else None
        is_ghost = asset is not None and asset.status is AssetStatus.GHOST
        return (is_ghost, -(record.val if record else Decimal("0")))

    keys.sort(key=_rank)
    for key in keys:
        record = category.items.get(key)
        asset = comparison.assets.get(key) if comparison else None
        if asset is not None and asset.status is AssetStatus.HIDDEN:
            continue
        rows.append(
            {
                "Source": record.source if record else asset.source,
                "Name": record.name if record else asset.name,
                "Value": format_money(record.val if record else Decimal("0")),
                "Delta": (
                    format_signed_money(asset.record.delta) if asset else "—"
                ),
                "Change": (
                    format_percent(asset.record.percent) if asset else "—"
                ),
                "Status": asset.status.value if asset else "",
                "Transfers": _adjustment_trail(record) if record else "",
            }
        )
    return rows


def _render_summary(view: MonthView) -> None:
    """Render total, net flow and profit metrics."""
    performance = view.performance
    total_delta = (
        format_percent(view.comparison.portfolio.percent)
        if view.comparison
        else None
    )
    total_col, flow_col, pnl_col = st.columns(3)
    total_col.metric("Total", format_money(view.snapshot.total), total_delta)
    flow_col.metric(
        "Net flow",
        format_signed_money(performance.net_flow),
        f"+{format_money(performance.total_deposits)} / "
        f"-{format_money(performance.total_withdraws)}",
        delta_color="off",
    )
    pnl_col.metric(
        "P&L",
        format_signed_money(performance.profit),
        format_percent(performance.yield_percent),
        help=f"Start of month: {format_money(performance.start_balance)}",
    )
    if view.is_first_month:
        st.caption("First tracked month: profit and yield start at zero.")


def _render_forecast(forecast: YearForecast) -> None:
    """Render month, year-to-date and projected annual returns."""
    st.subheader("Forecast")
    mode = st.radio(
        "Show",
        ["Percent", "Money"],
        horizontal=True,
        label_visibility="collapsed",
    )
    figures = [
        ("Month", forecast.month_yield, forecast.month_profit),
        ("Year to date", forecast.ytd, forecast.ytd_profit),
        ("Annual projection", forecast.projected, forecast.projected_profit),
    ]
    for column, (label, ratio, profit) in zip(st.columns(3), figures):
        value = (
            format_ratio(ratio)
            if mode == "Percent"
            else format_signed_money(profit)
        )
        column.metric(label, value)


def _prepare_donut_chart_data(
    categories: Mapping[str, CategorySnapshot],
    catalog: Mapping[str, CategoryInfo],
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows of positive category totals.

    Args:
        categories: Categories of the current snapshot.
        catalog: Shared catalog used to resolve titles and colors.

    Returns:
        list[dict[str, str | float]]: One row per category with a share.
    """
    items = [cat for cat in categories.values() if cat.total > 0]
    total_amount = sum((cat.total for cat in items), start=Decimal("0"))
    data: list[dict[str, str | float]] = []
    for cat in sorted(items, key=lambda c: c.total, reverse=True):
        share = cat.total / total_amount * Decimal("100")
        info = catalog.get(cat.id)
        data.append(
            {
                "category": info.title if info else cat.title,
                "color": (info.color if info and info.color else cat.color)
                or "#a0aec0",
                "amount": float(cat.total),
                "amount_label": format_money(cat.total),
                "share_label": f"{share:.1f}%",
            }
        )
    return data


def _render_category_chart(
    categories: Mapping[str, CategorySnapshot],
    catalog: Mapping[str, CategoryInfo],
    chart_size: int = 320,
) -> None:
    """Render a donut chart of category totals."""
    data = _prepare_donut_chart_data(categories, catalog)
    if not data:
        st.info("No positive balances to chart.")
        return
    chart = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=6,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(
                domain=[row["category"] for row in data],
                range=[row["color"] for row in data],
            ),
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    ).properties(width=chart_size, height=chart_size)
    st.altair_chart(chart, width="stretch")


def _render_categories(
    view: MonthView,
    catalog: Mapping[str, CategoryInfo],
) -> None:
    """Render one expander per category with its asset table."""
    categories = sort_categories(view.snapshot.categories.values(), catalog)
    for category in categories:
        delta = (
            view.comparison.categories.get(category.id)
            if view.comparison
            else None
        )
        title = category_title(category.id, catalog, view.virtual_document)
        header = f"{title}: {format_money(category.total)}"
        if delta is not None:
            header += (
                f" ({format_signed_money(delta.delta)}, "
                f"{format_percent(delta.percent)})"
            )
        color = category_color(category.id, catalog, view.virtual_document)
        with st.expander(header, expanded=True):
            st.markdown(
                f"<span style='color:{color}'>●</span> {category.id}",
                unsafe_allow_html=True,
            )
            st.dataframe(
                _category_rows(category, view.comparison),
                width="stretch",
                hide_index=True,
            )


def _render_transfers(
    view: MonthView,
    catalog: Mapping[str, CategoryInfo],
) -> None:
    """Render transfers grouped by file date."""
    if not view.transfer_batches:
        st.info("No transfers found for this month.")
        return
    for batch in view.transfer_batches:
        st.markdown(f"**{batch.date}**")
        st.dataframe(
            [
                describe_transfer(transfer, catalog, view.document)
                for transfer in batch.transfers
            ],
            width="stretch",
            hide_index=True,
        )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Portfolio Tracker", layout="wide")
    st.title("Portfolio Tracker")

    try:
        months = _load_available_months()
        catalog = _load_category_catalog()
    except DataSourceAuthError as exc:
        st.error(f"The data source rejected the credentials: {exc}")
        return
    except DataSourceError as exc:
        st.error(f"Could not list months. Check the data source: {exc}")
        return

    if not months:
        st.warning("No monthly documents found.")
        return

    labels = {month.id: month.label for month in months}
    month_id = st.sidebar.selectbox(
        "Month",
        options=list(labels),
        index=len(months) - 1,
        format_func=labels.get,
    )
    get_usage_logger().info(f"Month selected: {month_id}")

    try:
        view = _fetch_month_view(month_id, months)
    except MonthNotFoundError:
        st.error(f"No data for {labels[month_id]}. Create {month_id}.json.")
        return
    except DataSourceAuthError as exc:
        st.error(f"The data source rejected the credentials: {exc}")
        return
    except DataSourceError as exc:
        st.error(f"Failed to load data: {exc}")
        return
    if view is None:
        return

    st.header(view.label)
    _render_summary(view)
    _render_forecast(view.forecast)

    portfolio_tab, transfers_tab = st.tabs(["Portfolio", "Transfers"])
    with portfolio_tab:
        _render_category_chart(view.snapshot.categories, catalog)
        _render_categories(view, catalog)
    with transfers_tab:
        _render_transfers(view, catalog)


if __name__ == "__main__":  # pragma: no cover
    main()
