"""Domain services package."""

from .comparison import calculate_delta, classify_status, compare_snapshots
from .documents import (
    parse_category_catalog,
    parse_portfolio_document,
    parse_transfer,
    parse_transfer_file,
)
from .forecast import build_year_forecast
from .normalization import build_asset_key, normalize_key_part
from .performance import (
    calculate_performance,
    calculate_projected_annual,
    calculate_simple_yield,
    calculate_ytd,
)
from .snapshots import build_snapshot, calculate_total_balance
from .transfers import (
    aggregate_adjustments,
    apply_transfer_operation,
    merge_transfers,
    sum_flows,
)
from .validation import validate_asset_balance, validate_transfer_amount

__all__ = [
    "aggregate_adjustments",
    "apply_transfer_operation",
    "build_asset_key",
    "build_snapshot",
    "build_year_forecast",
    "calculate_delta",
    "calculate_performance",
    "calculate_projected_annual",
    "calculate_simple_yield",
    "calculate_total_balance",
    "calculate_ytd",
    "classify_status",
    "compare_snapshots",
    "merge_transfers",
    "normalize_key_part",
    "parse_category_catalog",
    "parse_portfolio_document",
    "parse_transfer",
    "parse_transfer_file",
    "sum_flows",
    "validate_asset_balance",
    "validate_transfer_amount",
]
