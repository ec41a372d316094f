"""
Result Sorting
Re-order an already filtered result set by a simple scalar key.

Relevance ordering comes from the search provider and is never recomputed
here; `relevance` keeps the received order.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..models.vendor import VendorRecord, normalize_vendor

logger = logging.getLogger(__name__)


class SortKey(str, Enum):
    """Supported sort options."""

    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING = "rating"
    EXPERIENCE = "experience"
    DISTANCE = "distance"


def _price_ascending(vendor: VendorRecord) -> Tuple:
    # Unknown price sorts last
    return (vendor.base_price is None, vendor.base_price or 0.0)


def _price_descending(vendor: VendorRecord) -> Tuple:
    return (vendor.base_price is None, -(vendor.base_price or 0.0))


def _rating_descending(vendor: VendorRecord) -> float:
    return -vendor.rating


def _experience_descending(vendor: VendorRecord) -> float:
    return -vendor.years_of_experience


def _distance_ascending(vendor: VendorRecord) -> Tuple:
    return (vendor.distance is None, vendor.distance or 0.0)


SORT_FUNCTIONS: Dict[SortKey, Callable[[VendorRecord], Any]] = {
    SortKey.PRICE_ASC: _price_ascending,
    SortKey.PRICE_DESC: _price_descending,
    SortKey.RATING: _rating_descending,
    SortKey.EXPERIENCE: _experience_descending,
    SortKey.DISTANCE: _distance_ascending,
}


def parse_sort_key(sort_key: Union[SortKey, str, None]) -> SortKey:
    """Resolve a sort key; None and unknown values fall back to relevance."""
    if sort_key is None:
        return SortKey.RELEVANCE
    try:
        return SortKey(sort_key)
    except ValueError:
        logger.warning(f"Unknown sort key '{sort_key}', keeping relevance order")
        return SortKey.RELEVANCE


def sort_vendors(
    vendors: Optional[Sequence[Any]], sort_key: Union[SortKey, str, None] = None
) -> List[Any]:
    """
    Return a newly ordered list; the input is never mutated.

    Sorting is stable, so ties keep their received order.

    Args:
        vendors: Filtered result set (VendorRecord or raw payloads)
        sort_key: SortKey or its string value

    Returns:
        New sorted list
    """
    if not vendors:
        return []

    key = parse_sort_key(sort_key)
    sort_function = SORT_FUNCTIONS.get(key)

    if sort_function is None:
        return list(vendors)

    decorated = [(sort_function(normalize_vendor(vendor)), vendor) for vendor in vendors]
    decorated.sort(key=lambda pair: pair[0])

    return [vendor for _, vendor in decorated]
