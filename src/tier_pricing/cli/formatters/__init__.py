"""CLI formatters package."""

from .json import (
    format_currencies_json,
    format_curve_json,
    format_json,
    format_paths_json,
    format_tiers_json,
)
from .table import (
    create_console,
    format_config_summary,
    format_currencies_table,
    format_curve_table,
    format_paths_table,
    format_tiers_table,
)

__all__ = [
    "format_json",
    "format_curve_json",
    "format_tiers_json",
    "format_currencies_json",
    "format_paths_json",
    "create_console",
    "format_curve_table",
    "format_tiers_table",
    "format_config_summary",
    "format_currencies_table",
    "format_paths_table",
]
