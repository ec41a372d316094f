"""
Facet Descriptor Models
Pydantic models describing the filterable dimensions sent by the search provider.
"""

import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import InvalidFacetDescriptorError

logger = logging.getLogger(__name__)

OptionValue = Union[int, float, str]


class FacetKey(str, Enum):
    """Filterable dimensions."""

    SERVICES = "services"
    CITIES = "cities"
    AREAS = "areas"
    BUDGET = "budget"
    RATING = "rating"
    VERIFIED = "verified"
    EXPERIENCE = "experience"


MULTI_SELECT_FACETS = frozenset({FacetKey.SERVICES, FacetKey.CITIES, FacetKey.AREAS})


def parse_facet_key(key: Any) -> Optional[FacetKey]:
    """Return the FacetKey for a key or its string value, None if unknown."""
    if isinstance(key, FacetKey):
        return key
    try:
        return FacetKey(key)
    except ValueError:
        return None


def format_option_value(value: Any) -> str:
    """
    Render an option value for synthetic count keys.

    Whole floats drop the fraction so a 4.0 threshold keys as "rating_4".
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class FacetOption(BaseModel):
    """
    One selectable option of an enumerable facet.

    Accepts the provider's shapes: {"value"}, {"id"}, {"taxonomyId", "name"},
    {"name"} for locations and {"rating", "label"} for rating thresholds.
    """

    model_config = ConfigDict(frozen=True)

    value: OptionValue
    label: Optional[str] = None
    count: Optional[int] = Field(None, ge=0, description="Provider-side count, display only")

    @model_validator(mode="before")
    @classmethod
    def map_provider_fields(cls, data):
        if not isinstance(data, Mapping):
            # Bare values ("Pune", 4.5)
            return {"value": data}

        data = dict(data)
        if data.get("value") is None:
            for alias in ("id", "taxonomyId", "rating", "name"):
                if data.get(alias) is not None:
                    data["value"] = data[alias]
                    break
        if data.get("label") is None and data.get("name") is not None:
            data["label"] = str(data["name"])
        return data

    @property
    def display_label(self) -> str:
        return self.label or format_option_value(self.value)


class BudgetRangeOption(BaseModel):
    """One budget range; a missing bound is unbounded on that side."""

    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    label: Optional[str] = None
    count: Optional[int] = Field(None, ge=0)


class FacetDescriptor(BaseModel):
    """
    One filterable dimension.

    Enumerable facets (services, cities, areas, rating) carry `options`;
    budget carries `ranges`; verified and experience carry neither.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    key: FacetKey
    label: Optional[str] = None
    options: List[FacetOption] = Field(default_factory=list)
    ranges: List[BudgetRangeOption] = Field(default_factory=list)
    available: bool = True

    @property
    def is_multi_select(self) -> bool:
        return self.key in MULTI_SELECT_FACETS


def _descriptor(key: FacetKey, body: Any) -> FacetDescriptor:
    """Build one descriptor from an availableFilters-style entry."""
    if isinstance(body, FacetDescriptor):
        return body

    if key == FacetKey.BUDGET:
        if isinstance(body, Mapping):
            return FacetDescriptor(key=key, ranges=body.get("ranges") or [])
        return FacetDescriptor(key=key, ranges=body or [])

    if key == FacetKey.RATING and isinstance(body, Mapping):
        return FacetDescriptor(
            key=key,
            options=body.get("filters") or body.get("options") or [],
            available=body.get("available", True),
        )

    if key in (FacetKey.VERIFIED, FacetKey.EXPERIENCE):
        available = body.get("available", True) if isinstance(body, Mapping) else bool(body)
        return FacetDescriptor(key=key, available=available)

    if isinstance(body, Mapping):
        return FacetDescriptor(key=key, **body)
    return FacetDescriptor(key=key, options=body or [])


def parse_facet_descriptors(payload: Any) -> List[FacetDescriptor]:
    """
    Parse provider facet metadata into descriptors.

    Accepts either a list of descriptor dicts ({"key": ..., "options": ...}) or
    the provider's availableFilters mapping, including its nested
    {"location": {"cities": [...], "areas": [...]}} shape. Unknown facet keys
    are skipped.

    Args:
        payload: Provider facet metadata (may be None)

    Returns:
        List of FacetDescriptor in payload order

    Raises:
        InvalidFacetDescriptorError: If a known facet fails validation
    """
    if not payload:
        return []

    if isinstance(payload, Mapping):
        entries: List[tuple] = []
        for name, body in payload.items():
            if name == "location" and isinstance(body, Mapping):
                entries.extend(body.items())
            else:
                entries.append((name, body))
    else:
        entries = []
        for item in payload:
            if isinstance(item, FacetDescriptor):
                entries.append((item.key, item))
            elif isinstance(item, Mapping):
                entries.append((item.get("key"), {k: v for k, v in item.items() if k != "key"}))
            else:
                raise InvalidFacetDescriptorError(str(item), errors=["expected a mapping"])

    descriptors = []
    for name, body in entries:
        key = parse_facet_key(name)
        if key is None:
            logger.debug(f"Skipping unknown facet in provider metadata: {name}")
            continue

        try:
            descriptors.append(_descriptor(key, body))
        except ValidationError as e:
            raise InvalidFacetDescriptorError(key.value, errors=e.errors()) from e

    return descriptors


def descriptors_by_key(descriptors: List[FacetDescriptor]) -> Dict[FacetKey, FacetDescriptor]:
    """Index descriptors by facet key (last one wins)."""
    return {d.key: d for d in descriptors}
