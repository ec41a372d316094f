"""
Data Models Package
Vendor records and facet descriptors consumed by the filter engine.
"""

from .vendor import VendorRecord, normalize_vendor, normalize_vendors
from .facets import (
    FacetKey,
    FacetOption,
    BudgetRangeOption,
    FacetDescriptor,
    MULTI_SELECT_FACETS,
    parse_facet_key,
    parse_facet_descriptors,
    descriptors_by_key,
    format_option_value,
)

__all__ = [
    "VendorRecord",
    "normalize_vendor",
    "normalize_vendors",
    "FacetKey",
    "FacetOption",
    "BudgetRangeOption",
    "FacetDescriptor",
    "MULTI_SELECT_FACETS",
    "parse_facet_key",
    "parse_facet_descriptors",
    "descriptors_by_key",
    "format_option_value",
]
