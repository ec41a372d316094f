"""
Vendor record model and provider adapter.
Normalizes raw search-provider payloads into the fields the filter engine reads.
"""

import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

ServiceId = Union[int, float, str]

# Lookup paths per field, first non-empty value wins
SERVICE_PATHS = (("servicesOffered",), ("service_ids",), ("services",), ("serviceType",))
PRICE_PATHS = (("pricingInfo", "basePrice"), ("basePrice",), ("base_price",), ("minPrice",))
CITY_PATHS = (("location", "city"), ("address", "city"), ("city",))
AREA_PATHS = (("location", "area"), ("address", "area"), ("area",))
VERIFIED_PATHS = (("isVerified",), ("verified",))
RATING_PATHS = (("rating",), ("averageRating",))
EXPERIENCE_PATHS = (("yearsOfExperience",), ("years_of_experience",))
DISTANCE_PATHS = (("distance",), ("distanceKm",))
ID_PATHS = (("_id",), ("id",), ("vendorId",), ("vendor_id",))
NAME_PATHS = (("businessName",), ("name",))

TRUE_STRINGS = {"1", "true", "yes", "y"}
FALSE_STRINGS = {"0", "false", "no", "n"}


def _to_float(v: Any) -> Optional[float]:
    """Parse a finite float, stripping currency symbols; None when not parseable."""
    if v is None or isinstance(v, bool):
        return None

    if isinstance(v, str):
        v = re.sub(r"[₹£$€,\s]", "", v)
        if not v:
            return None

    try:
        value = float(v)
    except (TypeError, ValueError):
        return None

    return value if math.isfinite(value) else None


def parse_flag(v: Any) -> Optional[bool]:
    """
    Parse an explicit boolean marker.

    Accepts bools, 1/0 and the strings in TRUE_STRINGS/FALSE_STRINGS
    (case-insensitive). Anything else is None.
    """
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        marker = v.strip().lower()
        if marker in TRUE_STRINGS:
            return True
        if marker in FALSE_STRINGS:
            return False
        return None
    if isinstance(v, int) and v in (0, 1):
        return v == 1
    return None


def normalize_service_id(entry: Any) -> Any:
    """Whole floats become ints so 5.0 and 5 name the same service."""
    if isinstance(entry, float) and entry.is_integer():
        return int(entry)
    return entry


class VendorRecord(BaseModel):
    """
    Normalized vendor as seen by the filter engine.

    Only the fields below are read by predicates and sorting. The raw provider
    payload is kept in `source` so callers get their own objects back.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    service_ids: Tuple[ServiceId, ...] = ()
    base_price: Optional[float] = None  # None = unknown price
    city: Optional[str] = None
    area: Optional[str] = None
    verified: bool = False
    rating: float = 0.0
    years_of_experience: float = 0.0
    distance: Optional[float] = None

    vendor_id: Optional[str] = None
    name: Optional[str] = None
    source: Any = Field(default=None, exclude=True, repr=False)

    @field_validator("service_ids", mode="before")
    @classmethod
    def clean_service_ids(cls, v):
        """Accept a single id, a list of ids, or entries carrying taxonomyId/id."""
        if v is None or v == "":
            return ()

        if isinstance(v, (str, int, float, Mapping)) or not isinstance(v, Iterable):
            v = [v]

        ids = []
        for entry in v:
            if isinstance(entry, Mapping):
                entry = entry.get("taxonomyId", entry.get("id"))
            if entry is None or entry == "" or isinstance(entry, bool):
                continue
            if not isinstance(entry, (str, int, float)):
                entry = str(entry)
            ids.append(normalize_service_id(entry))
        return tuple(ids)

    @field_validator("base_price", "distance", mode="before")
    @classmethod
    def clean_optional_number(cls, v):
        """Unknown or malformed numbers become None."""
        return _to_float(v)

    @field_validator("rating", "years_of_experience", mode="before")
    @classmethod
    def clean_number_default_zero(cls, v):
        """Missing or malformed numbers default to 0."""
        value = _to_float(v)
        return 0.0 if value is None else value

    @field_validator("city", "area", "vendor_id", "name", mode="before")
    @classmethod
    def clean_text(cls, v):
        """Strip text fields; blank becomes None."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("verified", mode="before")
    @classmethod
    def parse_verified(cls, v):
        """Only explicit truthy markers count as verified."""
        return parse_flag(v) is True


def _get(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key)
    return getattr(obj, key, None)


def _lookup(raw: Any, paths: Iterable[Tuple[str, ...]]) -> Any:
    """Return the first non-empty value found along the given key paths."""
    for path in paths:
        value = raw
        for key in path:
            if value is None:
                break
            value = _get(value, key)
        if value is not None and value != "":
            return value
    return None


def normalize_vendor(raw: Any) -> VendorRecord:
    """
    Normalize one provider payload into a VendorRecord.

    Accepts an existing VendorRecord (returned as is), a mapping, or any object
    exposing the provider's attribute names. Malformed values fall back to the
    field defaults instead of raising.

    Args:
        raw: Provider payload for a single vendor

    Returns:
        VendorRecord with the raw payload attached as `source`
    """
    if isinstance(raw, VendorRecord):
        return raw

    return VendorRecord(
        service_ids=_lookup(raw, SERVICE_PATHS),
        base_price=_lookup(raw, PRICE_PATHS),
        city=_lookup(raw, CITY_PATHS),
        area=_lookup(raw, AREA_PATHS),
        verified=_lookup(raw, VERIFIED_PATHS),
        rating=_lookup(raw, RATING_PATHS),
        years_of_experience=_lookup(raw, EXPERIENCE_PATHS),
        distance=_lookup(raw, DISTANCE_PATHS),
        vendor_id=_lookup(raw, ID_PATHS),
        name=_lookup(raw, NAME_PATHS),
        source=raw,
    )


def normalize_vendors(raw_vendors: Optional[Iterable[Any]]) -> List[VendorRecord]:
    """
    Normalize a provider result list, preserving order.

    None entries are dropped with a warning.

    Args:
        raw_vendors: Provider result list (may be None)

    Returns:
        List of VendorRecord
    """
    if not raw_vendors:
        return []

    records = []
    dropped = 0

    for raw in raw_vendors:
        if raw is None:
            dropped += 1
            continue
        records.append(normalize_vendor(raw))

    if dropped:
        logger.warning(f"Dropped {dropped} empty vendor entries from provider results")

    logger.debug(f"Normalized {len(records)} vendor records")

    return records
