"""
Filtering Module
In-memory faceted filtering over an already fetched vendor result set.
"""

from .active_filters import (
    UNSET,
    ActiveFilterSet,
    BudgetRange,
    active_count,
    clear_all,
    replace_facet,
    set_budget,
    set_single,
    toggle,
)
from .predicates import (
    FACET_PREDICATES,
    matches_area,
    matches_budget,
    matches_city,
    matches_experience,
    matches_rating,
    matches_services,
    matches_verified,
    vendor_matches_filter,
)
from .evaluator import apply_filters, matches_all
from .facet_counts import FacetCounts, calculate_facet_counts, facet_count, facet_count_key
from .sorting import SortKey, parse_sort_key, sort_vendors
from .facet_builder import (
    FacetBuilder,
    QuickFilter,
    format_budget_range,
    format_price,
    generate_budget_ranges,
    generate_rating_options,
    get_quick_filters,
)

__all__ = [
    "UNSET",
    "ActiveFilterSet",
    "BudgetRange",
    "active_count",
    "clear_all",
    "replace_facet",
    "set_budget",
    "set_single",
    "toggle",
    "FACET_PREDICATES",
    "matches_area",
    "matches_budget",
    "matches_city",
    "matches_experience",
    "matches_rating",
    "matches_services",
    "matches_verified",
    "vendor_matches_filter",
    "apply_filters",
    "matches_all",
    "FacetCounts",
    "calculate_facet_counts",
    "facet_count",
    "facet_count_key",
    "SortKey",
    "parse_sort_key",
    "sort_vendors",
    "FacetBuilder",
    "QuickFilter",
    "format_budget_range",
    "format_price",
    "generate_budget_ranges",
    "generate_rating_options",
    "get_quick_filters",
]
