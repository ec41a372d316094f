"""
Facet Counter
Marginal "what-if" counts for every selectable option of every facet.

For each option the current selection is copied with only that facet
replaced by the option alone, and the regular filter evaluator is run over
the full result set. Counting and filtering therefore share every rule.

Counts are recomputed from scratch on each call: O(facets x options x vendors),
which is fine for page-sized result sets.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from ..models.facets import (
    MULTI_SELECT_FACETS,
    FacetDescriptor,
    FacetKey,
    format_option_value,
    parse_facet_descriptors,
    parse_facet_key,
)
from ..models.vendor import normalize_vendors, parse_flag
from .active_filters import ActiveFilterSet, BudgetRange, replace_facet
from .evaluator import apply_filters

logger = logging.getLogger(__name__)

FacetCounts = Dict[str, int]


def facet_count_key(facet_key: Any, option: Any) -> str:
    """
    Synthetic key for one option count.

    Examples:
        facet_count_key("cities", "Pune")  # "cities_Pune"
        facet_count_key("budget", 2)       # "budget_2" (range index)
        facet_count_key("rating", 4.0)     # "rating_4"
    """
    key = parse_facet_key(facet_key)
    name = key.value if key is not None else str(facet_key)
    return f"{name}_{format_option_value(option)}"


def facet_count(
    vendors: Sequence[Any],
    active: Optional[ActiveFilterSet],
    facet_key: Any,
    value: Any,
) -> int:
    """
    Number of vendors matching if `value` were the only selection in its facet.

    All other facets keep their current constraints.

    Args:
        vendors: Current result set
        active: Current selection
        facet_key: Facet of the option
        value: Option identifier, rating threshold or BudgetRange

    Returns:
        Marginal count (0 for a budget or verified value that cannot be read)
    """
    key = parse_facet_key(facet_key)
    if key == FacetKey.BUDGET:
        try:
            value = BudgetRange.coerce(value)
        except TypeError:
            logger.debug(f"No count for malformed budget option: {value!r}")
            return 0
    elif key == FacetKey.VERIFIED:
        value = parse_flag(value)
        if value is None:
            return 0

    synthetic = replace_facet(active or ActiveFilterSet(), facet_key, value)
    return len(apply_filters(vendors, synthetic))


def _as_descriptors(descriptors: Any) -> Iterable[FacetDescriptor]:
    if isinstance(descriptors, (list, tuple)) and all(
        isinstance(d, FacetDescriptor) for d in descriptors
    ):
        return descriptors
    return parse_facet_descriptors(descriptors)


def calculate_facet_counts(
    vendors: Optional[Sequence[Any]],
    descriptors: Any,
    active: Optional[ActiveFilterSet] = None,
) -> FacetCounts:
    """
    Count matches for every option of every facet.

    Multi-select options are counted as the sole selection of their facet
    (not added to the current selection). Budget ranges are keyed by index,
    rating options by threshold. Verified and experience produce no entries.

    Args:
        vendors: Current result set (VendorRecord or raw payloads)
        descriptors: FacetDescriptor list or provider facet metadata
        active: Current selection (None = no filters)

    Returns:
        Flat mapping of synthetic option key -> count
    """
    if not descriptors:
        return {}

    records = normalize_vendors(vendors)
    active = active or ActiveFilterSet()
    counts: FacetCounts = {}

    for descriptor in _as_descriptors(descriptors):
        key = descriptor.key

        if key in MULTI_SELECT_FACETS or key == FacetKey.RATING:
            for option in descriptor.options:
                counts[facet_count_key(key, option.value)] = facet_count(
                    records, active, key, option.value
                )

        elif key == FacetKey.BUDGET:
            for index, budget_range in enumerate(descriptor.ranges):
                counts[facet_count_key(key, index)] = facet_count(
                    records, active, key, BudgetRange(min=budget_range.min, max=budget_range.max)
                )

    logger.debug(f"Calculated {len(counts)} facet counts over {len(records)} vendors")

    return counts
