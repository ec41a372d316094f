"""
Filter Evaluator
Apply the full active selection to a result set: AND across facets, OR within a facet.
"""

import logging
from typing import Any, List, Optional, Sequence

from ..models.vendor import VendorRecord, normalize_vendor
from .active_filters import ActiveFilterSet
from .predicates import FACET_PREDICATES

logger = logging.getLogger(__name__)


def matches_all(vendor: VendorRecord, active: ActiveFilterSet) -> bool:
    """
    True if the vendor satisfies every facet constraint in the selection.

    Facets without a value pass, so an empty selection matches everything.
    """
    for key, predicate in FACET_PREDICATES.items():
        if not predicate(vendor, getattr(active, key.value)):
            return False
    return True


def apply_filters(vendors: Optional[Sequence[Any]], active: Optional[ActiveFilterSet]) -> List[Any]:
    """
    Filter a result set by the active selection.

    Surviving vendors keep their input order. Raw provider payloads are
    normalized for evaluation and returned as given.

    Args:
        vendors: Current result set (VendorRecord or raw payloads)
        active: Current selection (None = no filters)

    Returns:
        New list of the matching vendors
    """
    if not vendors:
        return []

    if active is None or active.is_empty:
        return list(vendors)

    filtered = [
        vendor
        for vendor in vendors
        if vendor is not None and matches_all(normalize_vendor(vendor), active)
    ]

    logger.debug(f"Filtered {len(vendors)} vendors to {len(filtered)}")

    return filtered