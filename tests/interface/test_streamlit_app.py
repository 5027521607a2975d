"""Tests for the Streamlit app module."""

import asyncio
from contextlib import asynccontextmanager, contextmanager
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters.interface.streamlit import app
from src.application.ports.portfolio_source import (
    DataSourceAuthError,
    MonthOption,
)
from src.application.use_cases.load_month import (
    LoadMonthUseCase,
    MonthNotFoundError,
)
from src.domain.models import (
    AssetEntry,
    Category,
    CategoryInfo,
    PortfolioDocument,
)
from src.domain.services.comparison import compare_snapshots
from src.domain.services.snapshots import build_snapshot

DOCUMENTS = {
    "2026-01.json": {
        "portfolio": [
            {
                "id": "stocks",
                "title": "Stocks",
                "color": "#2b6cb0",
                "items": [
                    {"name": "ETF", "source": "Broker", "val": 1000},
                    {"name": "Old", "source": "Broker", "val": 300},
                ],
            },
        ]
    },
    "2026-02.json": {
        "portfolio": [
            {
                "id": "stocks",
                "title": "Stocks",
                "color": "#2b6cb0",
                "items": [
                    {"name": "ETF", "source": "Broker", "val": 1400},
                    {"name": "Old", "source": "Broker", "val": 0},
                ],
            },
            {"id": "cash", "title": "Cash", "items": []},
        ]
    },
    "transfers-2026-02-03.json": [
        {
            "type": "deposit",
            "category": "cash",
            "source": "Bank",
            "name": "EUR",
            "amount": 250,
        }
    ],
}

MONTHS = [
    MonthOption("2026-01", "January 2026"),
    MonthOption("2026-02", "February 2026"),
]


class _FakeSource:
    async def fetch_document(self, name):
        return DOCUMENTS.get(name)

    async def list_available(self):
        return MONTHS

    @asynccontextmanager
    async def session(self):
        yield


def _view(month_id="2026-02"):
    use_case = LoadMonthUseCase(_FakeSource(), logger=MagicMock())
    return asyncio.run(use_case.execute(month_id, MONTHS))


class _FakeColumn:
    def __init__(self, owner) -> None:
        self._owner = owner

    def metric(self, label, value, delta=None, **kwargs):
        self._owner.metrics[label] = (value, delta)


class _FakeStreamlit:
    def __init__(self, selected="2026-02") -> None:
        self.selected = selected
        self.config_called = False
        self.title_text = None
        self.headers: list[str] = []
        self.captions: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.infos: list[str] = []
        self.dataframes: list[tuple] = []
        self.expanders: list[str] = []
        self.metrics: dict[str, tuple] = {}
        self.charts: list = []
        self.selectbox_kwargs = None
        self.session_state: dict = {}
        self.sidebar = self

    def set_page_config(self, **kwargs):
        self.config_called = True

    def title(self, text: str):
        self.title_text = text

    def header(self, text: str):
        self.headers.append(text)

    def subheader(self, text: str):
        self.headers.append(text)

    def caption(self, text: str):
        self.captions.append(text)

    def markdown(self, text: str, **kwargs):
        pass

    def warning(self, text: str):
        self.warnings.append(text)

    def error(self, text: str):
        self.errors.append(text)

    def info(self, text: str):
        self.infos.append(text)

    def dataframe(self, data, **kwargs):
        self.dataframes.append((data, kwargs))

    def altair_chart(self, chart, **kwargs):
        self.charts.append(chart)

    def selectbox(self, label, options, index=0, format_func=str):
        self.selectbox_kwargs = {
            "options": options,
            "index": index,
            "labels": [format_func(option) for option in options],
        }
        return self.selected

    def radio(self, label, options, **kwargs):
        return options[0]

    def columns(self, count):
        return [_FakeColumn(self) for _ in range(count)]

    def tabs(self, labels):
        return [self._section() for _ in labels]

    def expander(self, label, **kwargs):
        self.expanders.append(label)
        return self._section()

    @contextmanager
    def _section(self):
        yield self

    def cache_data(self, **_kwargs):
        def decorator(func):
            return func

        return decorator


def test_fetch_available_months_runs_use_case(monkeypatch):
    class _FakeUseCase:
        async def execute(self):
            return MONTHS

    monkeypatch.setattr(
        app,
        "build_available_months_use_case",
        lambda: _FakeUseCase(),
    )

    assert app._fetch_available_months() == MONTHS


def test_load_available_months_uses_fetch(monkeypatch):
    """The cached loader should delegate to _fetch_available_months."""
    monkeypatch.setattr(app, "_fetch_available_months", lambda: ["cached"])

    assert app._load_available_months() == ["cached"]


def test_fetch_month_view_keeps_one_selection_per_session(monkeypatch):
    """Repeated loads go through the selection stored in session state."""
    calls = []
    built = []

    class _FakeLoadMonth:
        async def execute(self, month_id, available_months):
            calls.append((month_id, list(available_months)))
            return SimpleNamespace(month_id=month_id)

    def _build():
        built.append(_FakeLoadMonth())
        return built[-1]

    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "build_load_month_use_case", _build)

    first = app._fetch_month_view("2026-01", MONTHS)
    second = app._fetch_month_view("2026-02", MONTHS)

    assert first.month_id == "2026-01"
    assert second.month_id == "2026-02"
    assert calls == [("2026-01", MONTHS), ("2026-02", MONTHS)]
    assert len(built) == 1
    selection = fake_st.session_state["month_selection"]
    assert selection.current_month_id == "2026-02"


def test_fetch_month_view_drops_result_of_superseded_selection(monkeypatch):
    """A load that finishes after a newer selection yields no view."""
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)

    class _LoadMonth:
        async def execute(self, month_id, available_months):
            fake_st.session_state["month_selection"].select("2026-02")
            return SimpleNamespace(month_id=month_id)

    monkeypatch.setattr(app, "build_load_month_use_case", _LoadMonth)

    assert app._fetch_month_view("2026-01", MONTHS) is None


def test_month_selection_is_rebuilt_when_months_change(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "build_load_month_use_case", MagicMock)

    first = app._month_selection(MONTHS[:1])
    again = app._month_selection(MONTHS[:1])
    updated = app._month_selection(MONTHS)

    assert again is first
    assert updated is not first
    assert updated.available_months == MONTHS


def test_prepare_donut_chart_data_uses_catalog():
    """Catalog metadata overrides document titles and colors."""
    view = _view()
    catalog = {"stocks": CategoryInfo("stocks", "Equities", "#111111")}

    data = app._prepare_donut_chart_data(view.snapshot.categories, catalog)

    assert [row["category"] for row in data] == ["Equities", "Cash"]
    assert data[0]["color"] == "#111111"
    assert data[1]["color"] == "#a0aec0"
    assert data[0]["amount"] == 1400.0
    assert data[0]["share_label"] == "84.8%"


def test_category_rows_include_ghosts_and_transfer_trail():
    view = _view()

    stocks = app._category_rows(
        view.snapshot.categories["stocks"],
        view.comparison,
    )
    cash = app._category_rows(view.snapshot.categories["cash"], None)

    statuses = {row["Name"]: row["Status"] for row in stocks}
    assert statuses == {"ETF": "normal", "Old": "ghost"}
    assert cash[0]["Transfers"] == "0.00 + 250.00 = 250.00"
    assert cash[0]["Delta"] == "—"


def test_main_renders_month(monkeypatch):
    """main should render metrics, categories and transfers."""
    fake_st = _FakeStreamlit()
    usage_logger = MagicMock()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_available_months", lambda: MONTHS)
    monkeypatch.setattr(app, "_load_category_catalog", lambda: {})
    monkeypatch.setattr(
        app,
        "_fetch_month_view",
        lambda month_id, months: _view(month_id),
    )
    monkeypatch.setattr(app, "get_usage_logger", lambda: usage_logger)

    app.main()

    assert fake_st.config_called
    assert fake_st.title_text == "Portfolio Tracker"
    assert fake_st.selectbox_kwargs["index"] == 1
    assert fake_st.selectbox_kwargs["labels"] == [
        "January 2026",
        "February 2026",
    ]
    assert "February 2026" in fake_st.headers
    assert fake_st.metrics["Total"][0] == "1,650.00 $"
    assert fake_st.metrics["P&L"][0] == "+100.00 $"
    assert "Year to date" in fake_st.metrics
    assert len(fake_st.charts) == 1
    assert len(fake_st.expanders) == 2
    transfer_rows, _ = fake_st.dataframes[-1]
    assert transfer_rows[0]["Type"] == "deposit"
    assert transfer_rows[0]["Amount"] == "+250.00 $"
    assert fake_st.errors == []
    usage_logger.info.assert_called_once()


def test_main_marks_first_month(monkeypatch):
    fake_st = _FakeStreamlit(selected="2026-01")
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_available_months", lambda: MONTHS)
    monkeypatch.setattr(app, "_load_category_catalog", lambda: {})
    monkeypatch.setattr(
        app,
        "_fetch_month_view",
        lambda month_id, months: _view(month_id),
    )
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)

    app.main()

    assert fake_st.metrics["P&L"][0] == "+0.00 $"
    assert fake_st.captions
    assert "No transfers found for this month." in fake_st.infos


def test_main_warns_when_no_months(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_available_months", lambda: [])
    monkeypatch.setattr(app, "_load_category_catalog", lambda: {})

    app.main()

    assert fake_st.warnings == ["No monthly documents found."]


def test_main_reports_auth_errors(monkeypatch):
    fake_st = _FakeStreamlit()

    def _fail():
        raise DataSourceAuthError("401 Unauthorized")

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_available_months", _fail)

    app.main()

    assert "401 Unauthorized" in fake_st.errors[0]


def test_main_reports_missing_month(monkeypatch):
    fake_st = _FakeStreamlit()

    def _missing(month_id, months):
        raise MonthNotFoundError(month_id)

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_available_months", lambda: MONTHS)
    monkeypatch.setattr(app, "_load_category_catalog", lambda: {})
    monkeypatch.setattr(app, "_fetch_month_view", _missing)
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)

    app.main()

    assert fake_st.errors == [
        "No data for February 2026. Create 2026-02.json."
    ]
    assert fake_st.metrics == {}


def test_adjustment_trail_is_empty_for_plain_assets():
    record = SimpleNamespace(is_virtual=False)

    assert app._adjustment_trail(record) == ""


def _stocks(*items):
    return PortfolioDocument(
        categories=(
            Category(
                id="stocks",
                title="Stocks",
                color="",
                items=tuple(
                    AssetEntry(name=name, source="Broker", val=Decimal(val))
                    for name, val in items
                ),
            ),
        )
    )


def test_category_rows_sort_by_value_with_ghosts_last():
    snapshot = build_snapshot(
        _stocks(("Old", "0"), ("Small", "10"), ("ETF", "1400"))
    )
    previous = build_snapshot(
        _stocks(("Old", "300"), ("Small", "10"), ("ETF", "1000"))
    )

    rows = app._category_rows(
        snapshot.categories["stocks"],
        compare_snapshots(snapshot, previous),
    )

    assert [row["Name"] for row in rows] == ["ETF", "Small", "Old"]
    assert rows[-1]["Status"] == "ghost"


def test_render_categories_uses_catalog_titles_and_order(monkeypatch):
    fake_st = _FakeStreamlit()
    monkeypatch.setattr(app, "st", fake_st)
    catalog = {
        "cash": CategoryInfo("cash", "Liquidity", "#38a169", order=1),
        "stocks": CategoryInfo("stocks", "Equities", "#111111", order=2),
    }

    app._render_categories(_view(), catalog)

    assert [label.split(":")[0] for label in fake_st.expanders] == [
        "Liquidity",
        "Equities",
    ]


def test_main_reports_auth_errors_while_loading_month(monkeypatch):
    fake_st = _FakeStreamlit()

    def _rejected(month_id, months):
        raise DataSourceAuthError("Auth error: 401")

    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_available_months", lambda: MONTHS)
    monkeypatch.setattr(app, "_load_category_catalog", lambda: {})
    monkeypatch.setattr(app, "_fetch_month_view", _rejected)
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)

    app.main()

    assert fake_st.errors == [
        "The data source rejected the credentials: Auth error: 401"
    ]
    assert "Year to date" not in fake_st.metrics
