"""Tests for display formatting helpers."""

from decimal import Decimal

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
from src.domain.models import (
    Category,
    CategoryInfo,
    CategorySnapshot,
    Move,
    PortfolioDocument,
    Withdraw,
)

CATALOG = {"stocks": CategoryInfo("stocks", "Equities", "#111111")}
DOCUMENT = PortfolioDocument(
    categories=(
        Category(id="cash", title="Cash", color="#38a169"),
        Category(id="misc", title="Misc", color=""),
    )
)


def test_money_and_percent_formats():
    assert format_money(Decimal("1234.5")) == "1,234.50 $"
    assert format_money(Decimal("-3")) == "-3.00 $"
    assert format_signed_money(Decimal("3")) == "+3.00 $"
    assert format_signed_money(Decimal("-3")) == "-3.00 $"
    assert format_percent(Decimal("4.1666")) == "+4.17%"
    assert format_ratio(Decimal("-0.01")) == "-1.00%"


def test_category_metadata_prefers_catalog():
    assert category_title("stocks", CATALOG, DOCUMENT) == "Equities"
    assert category_title("cash", CATALOG, DOCUMENT) == "Cash"
    assert category_title("crypto", CATALOG, None) == "crypto"
    assert category_color("stocks", CATALOG, DOCUMENT) == "#111111"
    assert category_color("cash", CATALOG, DOCUMENT) == "#38a169"
    assert category_color("misc", CATALOG, DOCUMENT) == "#a0aec0"


def test_describe_transfer():
    withdraw = describe_transfer(
        Withdraw("cash", "Bank", "USD", Decimal("50")),
        CATALOG,
        DOCUMENT,
    )
    move = describe_transfer(
        Move("cash", "Bank", "USD", "stocks", "Broker", "ETF", Decimal("5")),
        CATALOG,
        DOCUMENT,
    )

    assert withdraw == {
        "Type": "withdraw",
        "Path": "Cash › Bank › USD",
        "Amount": "-50.00 $",
    }
    assert move["Path"] == "Cash › Bank › USD → Equities › Broker › ETF"
    assert move["Amount"] == "5.00 $"


def test_sort_categories_follows_catalog_order_then_totals():
    categories = [
        CategorySnapshot("cash", "Cash", "", Decimal("50")),
        CategorySnapshot("crypto", "Crypto", "", Decimal("10")),
        CategorySnapshot("stocks", "Stocks", "", Decimal("900")),
        CategorySnapshot("bonds", "Bonds", "", Decimal("300")),
        CategorySnapshot("misc", "Misc", "", Decimal("700")),
    ]
    catalog = {
        "cash": CategoryInfo("cash", "Cash", "", order=1),
        "bonds": CategoryInfo("bonds", "Bonds", "", order=2),
        "stocks": CategoryInfo("stocks", "Stocks", ""),
    }

    ordered = sort_categories(categories, catalog)

    assert [category.id for category in ordered] == [
        "cash",
        "bonds",
        "stocks",
        "misc",
        "crypto",
    ]
