"""
Vendor Predicates
One pure predicate per facet: does a single vendor satisfy a single facet constraint?

Predicates never raise. Missing vendor data fails a stated constraint
(fail-closed) and an empty/None constraint always passes.
"""

import math
from typing import AbstractSet, Any, Callable, Dict, Optional

from ..models.facets import FacetKey, parse_facet_key
from ..models.vendor import VendorRecord, parse_flag
from .active_filters import BudgetRange


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def matches_services(vendor: VendorRecord, selected: Optional[AbstractSet[Any]]) -> bool:
    """Any selected service offered (OR within the facet)."""
    if not selected:
        return True
    return any(service_id in selected for service_id in vendor.service_ids)


def matches_city(vendor: VendorRecord, selected: Optional[AbstractSet[Any]]) -> bool:
    if not selected:
        return True
    return vendor.city is not None and vendor.city in selected


def matches_area(vendor: VendorRecord, selected: Optional[AbstractSet[Any]]) -> bool:
    if not selected:
        return True
    return vendor.area is not None and vendor.area in selected


def matches_budget(vendor: VendorRecord, budget: Optional[BudgetRange]) -> bool:
    """
    Base price within [min, max] inclusive.

    An unknown price never fits a bounded budget. A budget with both bounds
    missing is no constraint.
    """
    if budget is None or not budget.is_bounded:
        return True

    price = vendor.base_price
    if price is None:
        return False

    low = _as_number(budget.min)
    high = _as_number(budget.max)

    if budget.min is not None and (low is None or price < low):
        return False
    if budget.max is not None and (high is None or price > high):
        return False

    return True


def matches_rating(vendor: VendorRecord, threshold: Optional[float]) -> bool:
    if threshold is None:
        return True
    minimum = _as_number(threshold)
    return minimum is not None and vendor.rating >= minimum


def matches_verified(vendor: VendorRecord, verified: Optional[bool]) -> bool:
    if verified is None:
        return True
    return vendor.verified is verified


def matches_experience(vendor: VendorRecord, min_years: Optional[float]) -> bool:
    if min_years is None:
        return True
    minimum = _as_number(min_years)
    return minimum is not None and vendor.years_of_experience >= minimum


FACET_PREDICATES: Dict[FacetKey, Callable[[VendorRecord, Any], bool]] = {
    FacetKey.SERVICES: matches_services,
    FacetKey.CITIES: matches_city,
    FacetKey.AREAS: matches_area,
    FacetKey.BUDGET: matches_budget,
    FacetKey.RATING: matches_rating,
    FacetKey.VERIFIED: matches_verified,
    FacetKey.EXPERIENCE: matches_experience,
}


def vendor_matches_filter(vendor: VendorRecord, facet_key: Any, value: Any) -> bool:
    """
    Check a vendor against one facet value.

    Multi-select facets take a single option identifier, budget a BudgetRange
    (or {min, max}), scalar facets their threshold/flag. Unknown facets match.

    Example:
        vendor_matches_filter(vendor, "cities", "Pune")
        vendor_matches_filter(vendor, FacetKey.RATING, 4.0)
    """
    key = parse_facet_key(facet_key)
    if key is None:
        return True

    if key in (FacetKey.SERVICES, FacetKey.CITIES, FacetKey.AREAS):
        return FACET_PREDICATES[key](vendor, frozenset([value]))

    if key == FacetKey.BUDGET:
        try:
            value = BudgetRange.coerce(value)
        except TypeError:
            return False
    elif key == FacetKey.VERIFIED:
        value = parse_flag(value)
        if value is None:
            return False

    return FACET_PREDICATES[key](vendor, value)
