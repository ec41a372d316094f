"""
Faceted Results Service
Bundles filtering, sorting and facet counts for one provider result set.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..config.settings import FilterEngineSettings, get_settings
from ..filtering.active_filters import ActiveFilterSet, active_count
from ..filtering.evaluator import apply_filters
from ..filtering.facet_builder import FacetBuilder, QuickFilter, get_quick_filters
from ..filtering.facet_counts import FacetCounts, calculate_facet_counts
from ..filtering.sorting import SortKey, parse_sort_key, sort_vendors
from ..models.facets import FacetDescriptor, parse_facet_descriptors
from ..models.vendor import VendorRecord, normalize_vendors

logger = logging.getLogger(__name__)


@dataclass
class FacetedResults:
    """
    Filtered view of a result set with everything the filter panel needs.
    """

    vendors: List[VendorRecord]
    facet_counts: FacetCounts
    active_filters: ActiveFilterSet
    active_count: int
    sort_key: SortKey

    total_results: int  # Before filtering
    filtered_results: int

    # Performance metrics
    filter_time_ms: float
    count_time_ms: float
    total_time_ms: float

    descriptors: List[FacetDescriptor] = field(default_factory=list)

    @property
    def filters_applied(self) -> bool:
        return self.active_count > 0

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "vendors": [
                v.source if v.source is not None else v.model_dump() for v in self.vendors
            ],
            "facet_counts": self.facet_counts,
            "active_filters": self.active_filters.to_dict(),
            "active_count": self.active_count,
            "sort_key": self.sort_key.value,
            "total_results": self.total_results,
            "filtered_results": self.filtered_results,
            "filters_applied": self.filters_applied,
            "filter_time_ms": self.filter_time_ms,
            "count_time_ms": self.count_time_ms,
            "total_time_ms": self.total_time_ms,
            "facets": [d.model_dump(mode="json") for d in self.descriptors],
        }


class FacetedResultsService:
    """
    Faceted view over one provider result set.

    Vendors are normalized once on construction. Descriptors come from the
    provider when given, otherwise they are derived from the vendors. Each
    apply() recomputes filtered results and counts from scratch for the
    selection passed in; the service holds no selection state.
    """

    def __init__(
        self,
        vendors: Optional[Sequence[Any]],
        descriptors: Any = None,
        settings: Optional[FilterEngineSettings] = None,
        service_labels: Optional[Mapping[Any, str]] = None,
    ):
        """
        Initialize faceted results service.

        Args:
            vendors: Provider result set in relevance order
            descriptors: FacetDescriptor list or provider facet metadata (optional)
            settings: Engine settings (defaults to the cached settings)
            service_labels: Service id -> display name, used when deriving facets
        """
        self.settings = settings or get_settings()
        self.vendors: List[VendorRecord] = normalize_vendors(vendors)

        if descriptors:
            self.descriptors = (
                list(descriptors)
                if isinstance(descriptors, (list, tuple))
                and all(isinstance(d, FacetDescriptor) for d in descriptors)
                else parse_facet_descriptors(descriptors)
            )
        else:
            self.descriptors = FacetBuilder(self.settings).build(self.vendors, service_labels)

        logger.info(
            f"Faceted results service initialized with {len(self.vendors)} vendors "
            f"and {len(self.descriptors)} facets"
        )

    def apply(
        self,
        active: Union[ActiveFilterSet, Dict[str, Any], None] = None,
        sort_key: Union[SortKey, str, None] = None,
    ) -> FacetedResults:
        """
        Filter, sort and count for a selection.

        Args:
            active: ActiveFilterSet or UI payload dict (None = no filters)
            sort_key: Sort option (defaults to the configured default)

        Returns:
            FacetedResults
        """
        start_time = time.time()

        if not isinstance(active, ActiveFilterSet):
            active = ActiveFilterSet.from_dict(active)

        key = parse_sort_key(sort_key if sort_key is not None else self.settings.default_sort_key)

        filtered = sort_vendors(apply_filters(self.vendors, active), key)
        filter_time = (time.time() - start_time) * 1000

        count_start = time.time()
        counts = calculate_facet_counts(self.vendors, self.descriptors, active)
        count_time = (time.time() - count_start) * 1000

        total_time = (time.time() - start_time) * 1000

        logger.debug(
            f"Applied {active_count(active)} filters: {len(filtered)}/{len(self.vendors)} "
            f"vendors, {len(counts)} counts in {total_time:.1f}ms"
        )

        return FacetedResults(
            vendors=filtered,
            facet_counts=counts,
            active_filters=active,
            active_count=active_count(active),
            sort_key=key,
            total_results=len(self.vendors),
            filtered_results=len(filtered),
            filter_time_ms=filter_time,
            count_time_ms=count_time,
            total_time_ms=total_time,
            descriptors=self.descriptors,
        )

    def quick_filters(self, city_selected: bool = False) -> List[QuickFilter]:
        """Quick filter suggestions for the current facets."""
        return get_quick_filters(self.descriptors, city_selected=city_selected, settings=self.settings)
