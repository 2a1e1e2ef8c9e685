"""Utilities package."""
from .constants import CATEGORIES, EXPENSE_CATEGORIES, TABS, TIME_FRAMES, CHART_TYPES, PRIORITIES, STATUSES
from .helpers import (
    format_currency,
    format_date,
    current_date_formatted,
    parse_expense_date,
    category_from_subcategory,
    generate_unique_id,
    read_number,
)
from .i18n import t, priority_label, status_label

__all__ = [
    "CATEGORIES",
    "EXPENSE_CATEGORIES",
    "TABS",
    "TIME_FRAMES",
    "CHART_TYPES",
    "PRIORITIES",
    "STATUSES",
    "format_currency",
    "format_date",
    "current_date_formatted",
    "parse_expense_date",
    "category_from_subcategory",
    "generate_unique_id",
    "read_number",
    "t",
    "priority_label",
    "status_label",
]
