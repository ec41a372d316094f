"""
Facet Builder
Derive facet descriptors from the current result set.

Used when the search provider sends results without facet metadata: options
come only from values present in the results, so every option can match.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from ..config.settings import FilterEngineSettings, get_settings
from ..models.facets import (
    BudgetRangeOption,
    FacetDescriptor,
    FacetKey,
    FacetOption,
    descriptors_by_key,
    format_option_value,
)
from ..models.vendor import VendorRecord, normalize_vendors

logger = logging.getLogger(__name__)


def format_price(price: float, currency_symbol: str = "₹") -> str:
    """
    Compact price label: lakhs above 1,00,000, thousands above 1,000.

    Examples:
        format_price(150000)  # "₹1.5L"
        format_price(20000)   # "₹20K"
        format_price(500)     # "₹500"
    """
    if price >= 100000:
        return f"{currency_symbol}{price / 100000:.1f}L"
    if price >= 1000:
        return f"{currency_symbol}{price / 1000:.0f}K"
    return f"{currency_symbol}{format_option_value(float(price))}"


def format_budget_range(min_price: float, max_price: float, currency_symbol: str = "₹") -> str:
    return f"{format_price(min_price, currency_symbol)} - {format_price(max_price, currency_symbol)}"


def generate_budget_ranges(
    prices: Sequence[float], range_count: int = 5, currency_symbol: str = "₹"
) -> List[BudgetRangeOption]:
    """
    Split the observed price span into equal-width ranges.

    Ranges containing no observed price are dropped. Bounds are floored and
    ceiled to whole currency units; labels use the exact edges. A single
    distinct price yields one range.

    Args:
        prices: Known vendor prices
        range_count: Number of equal-width ranges
        currency_symbol: Symbol for labels

    Returns:
        List of BudgetRangeOption, cheapest first
    """
    if len(prices) == 0:
        return []

    points = np.asarray(prices, dtype=np.float64)
    low = float(np.min(points))
    high = float(np.max(points))

    if low == high:
        return [
            BudgetRangeOption(
                min=float(np.floor(low)),
                max=float(np.ceil(high)),
                label=format_budget_range(low, high, currency_symbol),
                count=int(points.size),
            )
        ]

    edges = np.linspace(low, high, range_count + 1)
    ranges = []

    for i in range(range_count):
        range_min = float(edges[i])
        range_max = high if i == range_count - 1 else float(edges[i + 1])

        count = int(np.count_nonzero((points >= range_min) & (points <= range_max)))
        if count == 0:
            continue

        ranges.append(
            BudgetRangeOption(
                min=float(np.floor(range_min)),
                max=float(np.ceil(range_max)),
                label=format_budget_range(range_min, range_max, currency_symbol),
                count=count,
            )
        )

    return ranges


def generate_rating_options(
    ratings: Sequence[float], thresholds: Sequence[float]
) -> List[FacetOption]:
    """Threshold options ("4★ & above") that at least one vendor reaches."""
    if len(ratings) == 0:
        return []

    points = np.asarray(ratings, dtype=np.float64)
    options = []

    for threshold in thresholds:
        count = int(np.count_nonzero(points >= threshold))
        if count > 0:
            options.append(
                FacetOption(
                    value=float(threshold),
                    label=f"{format_option_value(float(threshold))}★ & above",
                    count=count,
                )
            )

    return options


def _value_options(values: List[Any], labels: Optional[Mapping[Any, str]] = None) -> List[FacetOption]:
    """Distinct values in first-seen order, with occurrence counts."""
    counts: Dict[Any, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1

    labels = labels or {}
    return [
        FacetOption(value=value, label=labels.get(value, str(value)), count=count)
        for value, count in counts.items()
    ]


class FacetBuilder:
    """
    Builds facet descriptors from a vendor result set.

    Produces services, budget, cities, areas, rating and (when any vendor is
    verified) verified descriptors, in that order.
    """

    def __init__(self, settings: Optional[FilterEngineSettings] = None):
        """
        Initialize facet builder.

        Args:
            settings: Engine settings (defaults to the cached settings)
        """
        self.settings = settings or get_settings()

    def build(
        self,
        vendors: Optional[Sequence[Any]],
        service_labels: Optional[Mapping[Any, str]] = None,
    ) -> List[FacetDescriptor]:
        """
        Derive descriptors from vendors.

        Args:
            vendors: Current result set (VendorRecord or raw payloads)
            service_labels: Optional mapping of service id -> display name

        Returns:
            List of FacetDescriptor; facets with no values are omitted
        """
        records: List[VendorRecord] = normalize_vendors(vendors)
        if not records:
            return []

        descriptors = []

        service_options = _value_options(
            [service_id for r in records for service_id in r.service_ids], service_labels
        )
        if service_options:
            descriptors.append(FacetDescriptor(key=FacetKey.SERVICES, options=service_options))

        budget_ranges = generate_budget_ranges(
            [r.base_price for r in records if r.base_price is not None],
            range_count=self.settings.budget_range_count,
            currency_symbol=self.settings.currency_symbol,
        )
        if budget_ranges:
            descriptors.append(FacetDescriptor(key=FacetKey.BUDGET, ranges=budget_ranges))

        city_options = _value_options([r.city for r in records if r.city is not None])
        if city_options:
            descriptors.append(FacetDescriptor(key=FacetKey.CITIES, options=city_options))

        area_options = _value_options([r.area for r in records if r.area is not None])
        if area_options:
            descriptors.append(
                FacetDescriptor(
                    key=FacetKey.AREAS, options=area_options[: self.settings.max_area_options]
                )
            )

        rating_options = generate_rating_options(
            [r.rating for r in records if r.rating > 0], self.settings.rating_thresholds
        )
        if rating_options:
            descriptors.append(FacetDescriptor(key=FacetKey.RATING, options=rating_options))

        if any(r.verified for r in records):
            descriptors.append(FacetDescriptor(key=FacetKey.VERIFIED))

        logger.debug(f"Built {len(descriptors)} facets from {len(records)} vendors")

        return descriptors


@dataclass
class QuickFilter:
    """Suggested facet shortcut for the top of the results page."""

    facet: FacetKey
    label: str
    options: List[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "facet": self.facet.value,
            "label": self.label,
            "options": [option.model_dump() for option in self.options],
        }


def get_quick_filters(
    descriptors: Sequence[FacetDescriptor],
    city_selected: bool = False,
    settings: Optional[FilterEngineSettings] = None,
) -> List[QuickFilter]:
    """
    Prioritized quick filter suggestions.

    Services when there is a choice, budget and rating whenever available,
    cities only when the search was not already scoped to a city.

    Args:
        descriptors: Current facet descriptors
        city_selected: Whether the search itself was for one city
        settings: Engine settings (defaults to the cached settings)

    Returns:
        List of QuickFilter in display order
    """
    settings = settings or get_settings()
    by_key = descriptors_by_key(list(descriptors))
    suggestions = []

    services = by_key.get(FacetKey.SERVICES)
    if services and len(services.options) > 1:
        suggestions.append(
            QuickFilter(
                FacetKey.SERVICES, "Service Type", services.options[: settings.quick_service_options]
            )
        )

    budget = by_key.get(FacetKey.BUDGET)
    if budget and budget.ranges:
        suggestions.append(
            QuickFilter(FacetKey.BUDGET, "Budget Range", budget.ranges[: settings.quick_budget_options])
        )

    rating = by_key.get(FacetKey.RATING)
    if rating and rating.available and rating.options:
        suggestions.append(
            QuickFilter(
                FacetKey.RATING, "Customer Rating", rating.options[: settings.quick_rating_options]
            )
        )

    cities = by_key.get(FacetKey.CITIES)
    if not city_selected and cities and len(cities.options) > 1:
        suggestions.append(
            QuickFilter(FacetKey.CITIES, "Location", cities.options[: settings.quick_city_options])
        )

    return suggestions
